from __future__ import annotations

from django.apps import AppConfig


class WebConfig(AppConfig):
    name = "weathertool.web"
    label = "web"
    verbose_name = "Weather Tool"
