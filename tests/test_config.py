"""Settings validation: database URLs, session options, weather options."""

import unittest

from pydantic import ValidationError

from tripcast.core.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDefaults(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.PORT, 3000)
        self.assertEqual(s.API_V1_PREFIX, "/api/v1")
        self.assertTrue(s.DATABASE_URL.startswith("sqlite://"))
        self.assertEqual(s.ADMIN_POLICY, "allow_all")
        self.assertEqual(s.DEFAULT_CITY, "Milwaukee")


class TestDatabaseUrl(unittest.TestCase):
    def test_sqlite_and_postgres_accepted(self) -> None:
        for url in ("sqlite://", "sqlite:///./x.db", "postgresql+psycopg2://u:p@db/trips"):
            with self.subTest(url=url):
                self.assertEqual(_settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_other_schemes_rejected(self) -> None:
        for url in ("", "mysql://u:p@db/trips", "not a url"):
            with self.subTest(url=url):
                with self.assertRaises(ValidationError):
                    _settings(DATABASE_URL=url)


class TestSessionSettings(unittest.TestCase):
    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(SESSION_SECRET="   ")

    def test_expiry_bounds(self) -> None:
        self.assertEqual(_settings(SESSION_EXPIRE_MINUTES=1).SESSION_EXPIRE_MINUTES, 1)
        for minutes in (0, 43201):
            with self.subTest(minutes=minutes):
                with self.assertRaises(ValidationError):
                    _settings(SESSION_EXPIRE_MINUTES=minutes)

    def test_unknown_admin_policy_rejected(self) -> None:
        self.assertEqual(_settings(ADMIN_POLICY="role").ADMIN_POLICY, "role")
        with self.assertRaises(ValidationError):
            _settings(ADMIN_POLICY="everyone")


class TestCorsSettings(unittest.TestCase):
    def test_no_origins_by_default(self) -> None:
        self.assertEqual(_settings().CORS_ORIGINS, [])

    def test_explicit_origins(self) -> None:
        s = _settings(CORS_ORIGINS=["http://localhost:5173/", " "])
        self.assertEqual(s.CORS_ORIGINS, ["http://localhost:5173"])

    def test_wildcard_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(CORS_ORIGINS=["*"])


class TestWeatherSettings(unittest.TestCase):
    def test_blank_api_key_means_not_configured(self) -> None:
        self.assertIsNone(_settings(OPENWEATHER_API_KEY="  ").OPENWEATHER_API_KEY)

    def test_api_key_kept_secret(self) -> None:
        s = _settings(OPENWEATHER_API_KEY="abc123")
        self.assertEqual(s.OPENWEATHER_API_KEY.get_secret_value(), "abc123")
        self.assertNotIn("abc123", repr(s))

    def test_base_url_trailing_slash_stripped(self) -> None:
        s = _settings(OPENWEATHER_BASE_URL="https://weather.example.com/data/2.5/")
        self.assertEqual(s.OPENWEATHER_BASE_URL, "https://weather.example.com/data/2.5")

    def test_base_url_requires_http(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(OPENWEATHER_BASE_URL="ftp://weather.example.com")

    def test_timeout_bounds(self) -> None:
        for timeout in (0, -1, 61):
            with self.subTest(timeout=timeout):
                with self.assertRaises(ValidationError):
                    _settings(WEATHER_REQUEST_TIMEOUT_SEC=timeout)


if __name__ == "__main__":
    unittest.main()
