from bucharest_weather.cli import run

run()
