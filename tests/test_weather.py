"""Weather gateway against a mocked OpenWeatherMap (httpx.MockTransport); no network."""

import asyncio
import unittest

import httpx

from tripcast.services.weather import (
    WeatherFetchError,
    WeatherGateway,
    WeatherNotConfiguredError,
    WeatherUnavailableError,
    _location_params,
    parse_current,
    parse_forecast,
)

CURRENT_BODY = {
    "coord": {"lon": -87.9065, "lat": 43.0389},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "main": {
        "temp": 71.6,
        "feels_like": 70.9,
        "temp_min": 68.0,
        "temp_max": 74.1,
        "pressure": 1016,
        "humidity": 48,
    },
    "wind": {"speed": 9.2, "deg": 230},
    "dt": 1760885000,
    "sys": {"country": "US"},
    "name": "Milwaukee",
    "cod": 200,
}

FORECAST_BODY = {
    "cod": "200",
    "list": [
        {
            "dt": 1760896800,
            "main": {"temp": 65.3, "feels_like": 64.0, "humidity": 60},
            "weather": [{"main": "Clouds", "description": "few clouds", "icon": "02n"}],
            "wind": {"speed": 5.1},
            "pop": 0.1,
        },
        {
            "dt": 1760907600,
            "main": {"temp": 60.8, "feels_like": 59.5, "humidity": 72},
            "weather": [{"main": "Rain", "description": "light rain", "icon": "10n"}],
            "wind": {"speed": 7.4},
            "pop": 0.6,
        },
    ],
    "city": {"name": "Milwaukee", "country": "US", "coord": {"lat": 43.0389, "lon": -87.9065}},
}


def _gateway(handler, api_key: str | None = "test-key") -> WeatherGateway:
    return WeatherGateway(
        api_key=api_key,
        base_url="https://weather.test/data/2.5",
        units="imperial",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestParsing(unittest.TestCase):
    def test_parse_current(self) -> None:
        weather = parse_current(CURRENT_BODY, "imperial")
        self.assertEqual(weather.location, "Milwaukee")
        self.assertEqual(weather.country, "US")
        self.assertEqual(weather.temperature, 71.6)
        self.assertEqual(weather.humidity, 48)
        self.assertEqual(weather.conditions.description, "clear sky")
        self.assertEqual(
            weather.conditions.icon_url, "https://openweathermap.org/img/wn/01d@2x.png"
        )
        self.assertIsNotNone(weather.observed_at)

    def test_parse_forecast(self) -> None:
        forecast = parse_forecast(FORECAST_BODY, "imperial")
        self.assertEqual(forecast.location, "Milwaukee")
        self.assertEqual([p.conditions.main for p in forecast.periods], ["Clouds", "Rain"])
        self.assertEqual(forecast.periods[1].precipitation_probability, 0.6)

    def test_malformed_body(self) -> None:
        with self.assertRaises(WeatherFetchError):
            parse_current({"name": "Nowhere"}, "imperial")
        with self.assertRaises(WeatherFetchError):
            parse_forecast({"list": []}, "imperial")


class TestLocationParams(unittest.TestCase):
    def test_city(self) -> None:
        self.assertEqual(_location_params("  Paris ", None, None), {"q": "Paris"})

    def test_coordinates_win(self) -> None:
        self.assertEqual(_location_params("Paris", 1.5, 2.5), {"lat": 1.5, "lon": 2.5})

    def test_invalid(self) -> None:
        for args in ((None, None, None), ("  ", None, None), (None, 10.0, None), (None, 91.0, 0.0), (None, 0.0, 181.0)):
            with self.subTest(args=args):
                with self.assertRaises(ValueError):
                    _location_params(*args)


class TestGateway(unittest.TestCase):
    def test_current_sends_key_units_and_city(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=CURRENT_BODY)

        weather = asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertEqual(weather.location, "Milwaukee")
        self.assertEqual(len(seen), 1)
        self.assertEqual(seen[0].url.path, "/data/2.5/weather")
        params = seen[0].url.params
        self.assertEqual(params["q"], "Milwaukee")
        self.assertEqual(params["appid"], "test-key")
        self.assertEqual(params["units"], "imperial")

    def test_forecast_by_coordinates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/data/2.5/forecast")
            self.assertEqual(request.url.params["lat"], "43.0389")
            self.assertNotIn("q", request.url.params)
            return httpx.Response(200, json=FORECAST_BODY)

        forecast = asyncio.run(_gateway(handler).forecast(lat=43.0389, lon=-87.9065))
        self.assertEqual(len(forecast.periods), 2)

    def test_unknown_city(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"cod": "404", "message": "city not found"})

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Atlantis"))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "Location not found.")

    def test_rejected_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"cod": 401, "message": "Invalid API key"})

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertEqual(ctx.exception.status_code, 401)

    def test_provider_error_includes_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="upstream exploded")

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("500", ctx.exception.message)

    def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertIsNone(ctx.exception.status_code)
        self.assertIsInstance(ctx.exception, WeatherUnavailableError)
        self.assertEqual(ctx.exception.message, "Weather provider is unreachable.")

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertEqual(ctx.exception.message, "Weather provider timed out.")
        self.assertIsInstance(ctx.exception, WeatherUnavailableError)

    def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with self.assertRaises(WeatherFetchError):
            asyncio.run(_gateway(handler).current(city="Milwaukee"))

    def test_undecodable_body_is_a_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b'{"name": "\xff\xfe"}')

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertNotIsInstance(ctx.exception, WeatherUnavailableError)

    def test_provider_error_status_is_not_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"message": "provider unreachable upstream"})

        with self.assertRaises(WeatherFetchError) as ctx:
            asyncio.run(_gateway(handler).current(city="Milwaukee"))
        self.assertNotIsInstance(ctx.exception, WeatherUnavailableError)
        self.assertEqual(ctx.exception.status_code, 503)

    def test_not_configured_makes_no_request(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=CURRENT_BODY)

        gateway = _gateway(handler, api_key=None)
        self.assertFalse(gateway.is_configured)
        with self.assertRaises(WeatherNotConfiguredError):
            asyncio.run(gateway.current(city="Milwaukee"))
        self.assertEqual(calls, [])


if __name__ == "__main__":
    unittest.main()
