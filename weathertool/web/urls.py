"""Web URL configuration."""
from __future__ import annotations

from django.urls import path

from weathertool.web.views import WeatherApiView, WeatherPageView

urlpatterns = [
    path("", WeatherPageView.as_view(), name="index"),
    path("api/weather", WeatherApiView.as_view(), name="weather-api"),
]
