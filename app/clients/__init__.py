from .property_api import PropertyApiError, add_property_via_api, add_property_via_webhook

__all__ = ["PropertyApiError", "add_property_via_api", "add_property_via_webhook"]
