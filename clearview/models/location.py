from clearview.models.base import Document


class GeocodeResult(Document):
    """A single geocoding hit."""

    lat: float
    lon: float
    display_name: str
