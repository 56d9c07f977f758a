"""Basic usage examples for the Bucharest weather client."""

import asyncio

from bucharest_weather import AsyncWeatherClient, LocationConfig, Settings
from bucharest_weather.insights import generate_insights


async def main() -> None:
    settings = Settings()
    if not settings.has_api_key:
        print("Set OPENWEATHER_API_KEY to run this example.")
        return

    location = settings.location()
    async with AsyncWeatherClient(api_key=settings.api_key) as client:
        # Current conditions
        print("=== Now ===")
        now = await client.current(location)
        print(f"  {now.temp}°C (feels like {now.feels_like}°C), {now.description}")
        print(f"  Humidity: {now.humidity}%, Wind: {now.wind_speed} m/s {now.wind_direction}")

        # Three-day forecast, one entry per local day
        print("\n=== Forecast ===")
        days = await client.forecast(location, days=3)
        for day in days:
            print(f"  {day.day_name[:3]} {day.date}: {day.temp_min}°..{day.temp_max}° {day.description}")

        # Air quality and UV use the configured coordinates
        print("\n=== Air & UV ===")
        air = await client.air_quality(location)
        uv = await client.uv_index(location)
        print(f"  AQI {air.aqi} ({air.aqi_description}), UV {uv.uv_index} ({uv.uv_description})")

        # A second call within five minutes is served from the cache
        again = await client.current(location)
        print(f"\n  Cached: {again.from_cache}, {client.cache_stats()['entries']} entries")

        # Advice derived from the readings
        print("\n=== Insights ===")
        insights = generate_insights(now, days, air, uv)
        print(f"  {insights.clothing}")
        print(f"  {insights.activity}")
        for alert in insights.alerts:
            print(f"  [{alert.level}] {alert.message}")

    # Other cities work the same way
    cluj = LocationConfig(city="Cluj-Napoca", lat=46.7712, lon=23.6236)
    async with AsyncWeatherClient(api_key=settings.api_key) as client:
        print(f"\n  Cluj-Napoca: {(await client.current(cluj)).temp}°C")


if __name__ == "__main__":
    asyncio.run(main())
