"""Views for the weather search page and its JSON counterpart."""
from __future__ import annotations

import logging
from dataclasses import asdict
from functools import lru_cache

from django.conf import settings
from django.contrib import messages
from django.http import HttpResponseBadRequest
from django.shortcuts import redirect, render
from django.views import View
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weathertool.core.abstractions import FIELD_ORDER, LocationQuery, WeatherFieldSelection
from weathertool.core.formatting import display_rows
from weathertool.core.notifications import NOT_FOUND, TRANSPORT, UNEXPECTED, VALIDATION, AlertCollector
from weathertool.core.providers.base import RequestConfig
from weathertool.core.providers.opencage import OpenCageGeocoder
from weathertool.core.providers.openmeteo import OpenMeteoProvider
from weathertool.core.services.search import SearchService
from weathertool.core.state import SearchState
from weathertool.web.forms import LocationForm, ToggleFieldForm


logger = logging.getLogger(__name__)

SESSION_KEY = "weathertool.search"


@lru_cache(maxsize=1)
def get_search_service() -> SearchService:
    if not settings.OPENCAGE_API_KEY:
        logger.warning("OPENCAGE_API_KEY is not set; geocoding requests will be rejected")
    request_config = RequestConfig(timeout=settings.WEATHER_REQUEST_TIMEOUT)
    return SearchService(
        geocoder=OpenCageGeocoder(
            api_key=settings.OPENCAGE_API_KEY,
            base_url=settings.OPENCAGE_GEOCODE_URL,
            request_config=request_config,
        ),
        weather=OpenMeteoProvider(
            base_url=settings.OPEN_METEO_FORECAST_URL,
            request_config=request_config,
        ),
    )


def load_state(request) -> SearchState:
    return SearchState.from_session(request.session.get(SESSION_KEY))


def save_state(request, state: SearchState) -> None:
    request.session[SESSION_KEY] = state.to_session()


class WeatherPageView(View):
    """Render the search form and handle its actions."""

    template_name = "web/index.html"

    def get(self, request, *args, **kwargs):
        state = load_state(request)
        context = {
            "form": LocationForm(initial=state.query.as_dict()),
            "state": state,
            "rows": display_rows(state.reading, state.selection) if state.reading else [],
            "field_choices": [(field, field in state.selection) for field in FIELD_ORDER],
            "alerts": [str(message) for message in messages.get_messages(request)],
        }
        return render(request, self.template_name, context)

    def post(self, request, *args, **kwargs):
        action = request.POST.get("action", "search")
        state = load_state(request)

        if action == "search":
            form = LocationForm(request.POST)
            if not form.is_valid():
                return HttpResponseBadRequest("Invalid location input")
            collector = AlertCollector()
            state = get_search_service().submit(state, form.to_query(), collector)
            for message in collector.messages():
                messages.error(request, message)
        elif action == "toggle_field":
            form = ToggleFieldForm(request.POST)
            if not form.is_valid():
                return HttpResponseBadRequest("Unknown weather field")
            state = state.toggle_field(form.weather_field())
        elif action == "toggle_settings":
            state = state.toggle_settings()
        else:
            return HttpResponseBadRequest("Unknown action")

        save_state(request, state)
        return redirect("index")


class WeatherApiView(APIView):
    """Resolve a place name and return its current conditions as JSON."""

    permission_classes = [AllowAny]

    status_by_kind = {
        VALIDATION: status.HTTP_400_BAD_REQUEST,
        NOT_FOUND: status.HTTP_404_NOT_FOUND,
        TRANSPORT: status.HTTP_502_BAD_GATEWAY,
        UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the location and formatted reading for the query params."""
        raw_fields = request.query_params.get("fields")
        try:
            if raw_fields is None:
                selection = WeatherFieldSelection.default()
            else:
                selection = WeatherFieldSelection.from_names(
                    name.strip() for name in raw_fields.split(",") if name.strip()
                )
        except ValueError:
            allowed = ", ".join(field.value for field in FIELD_ORDER)
            return Response(
                {"detail": f"fields must be a comma-separated list of: {allowed}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        query = LocationQuery.from_values(
            request.query_params.get("city"),
            request.query_params.get("state"),
            request.query_params.get("country"),
        )
        collector = AlertCollector()
        result = get_search_service().submit(SearchState(selection=selection), query, collector)

        alert = collector.first
        if alert is not None:
            return Response(
                {
                    "detail": alert.message,
                    "source": alert.source,
                    "alerts": [asdict(item) for item in collector.alerts],
                },
                status=self.status_by_kind.get(alert.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
            )

        return Response(
            {
                "location": result.location.as_dict(),
                "reading": result.reading.as_dict(),
                "alerts": [],
            },
            status=status.HTTP_200_OK,
        )
