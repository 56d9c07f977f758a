"""Render demo conditions through every template, or one template in every theme."""

import sys

from bucharest_weather.insights import generate_insights
from bucharest_weather.mock import mock_forecast, mock_weather
from bucharest_weather.rendering import available_templates, available_themes, render


def main(template: str | None = None) -> None:
    weather = mock_weather()
    forecast = mock_forecast(5)
    insights = generate_insights(weather, forecast)

    if template is None:
        for name, description in available_templates():
            print(f"\n##### {name}: {description}")
            print(render(name, weather, forecast, insights))
        return

    for theme, description in available_themes():
        print(f"\n##### {template} / {theme}: {description}")
        print(render(template, weather, forecast, insights, theme=theme))


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
