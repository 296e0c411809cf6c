"""Forms backing the weather page."""
from __future__ import annotations

from django import forms

from weathertool.core.abstractions import LocationQuery, WeatherField


class LocationForm(forms.Form):
    # City and country presence is checked by the search service.
    city = forms.CharField(required=False, max_length=200)
    state = forms.CharField(required=False, max_length=200)
    country = forms.CharField(required=False, max_length=200)

    def to_query(self) -> LocationQuery:
        data = self.cleaned_data
        return LocationQuery.from_values(data.get("city"), data.get("state"), data.get("country"))


class ToggleFieldForm(forms.Form):
    field = forms.ChoiceField(choices=[(field.value, field.label) for field in WeatherField])

    def weather_field(self) -> WeatherField:
        return WeatherField(self.cleaned_data["field"])
