# tests/test_share_text.py
"""
Tests des textes de partage WhatsApp / presse-papier
Exécuter: pytest tests/test_share_text.py -v
"""
from urllib.parse import unquote

from conftest import contact, make_property, make_requirement

from app.models import AgentRef
from app.services.share_text import (
    NA, ShareFormat, format_clipboard, format_inr, format_number, format_whatsapp,
    render_requirement_share, whatsapp_share_url
)


def test_format_inr():
    assert format_inr(7500000) == "75,00,000"
    assert format_inr(1234567.5) == "12,34,567.5"
    assert format_inr(999) == "999"
    assert format_inr(0) == "0"


def test_format_number():
    assert format_number(1200.0) == "1200"
    assert format_number(416.5) == "416.5"


def test_whatsapp_property_text():
    prop = make_property(
        description="Corner flat with sea view",
        owner_details=contact("Anil Mehta", "+91 98200 11111"),
        price_per_sqft=6000,
    )
    text = format_whatsapp(prop, agency="Magixland Real Estate")

    assert text.startswith("🏠 *Sea View Apartment*")
    assert "🔢 *Property Code:* NA007" in text
    assert "💰 *Price:* ₹75,00,000" in text
    assert "📍 *Location:* Skyline Towers, Pune" in text
    assert "🛏️ *Bedrooms:* 3" in text
    assert "📐 *Area:* 1250 sqft" in text
    assert "👨‍💼 *Agent:* Ravi Kumar" in text
    assert "📝 *Description:*\nCorner flat with sea view" in text
    assert "👤 *Owner:* Anil Mehta" in text
    assert "💰 *Price per Sq Ft:* ₹6,000" in text
    assert "Status: Available" in text
    assert text.endswith("🏢 *Magixland Real Estate*\n#PropertyForSale #RealEstate #Magixland")


def test_fields_appear_in_fixed_order():
    text = format_whatsapp(make_property(location_url="https://maps.example/1"))
    markers = ["Property Code", "Price:", "Location:", "Type", "Bedrooms", "Bathrooms",
               "Area", "Agent", "Contact", "Address", "Location URL", "Price per Sq Ft", "Status"]
    positions = [text.index(marker) for marker in markers]
    assert positions == sorted(positions)


def test_clipboard_has_no_markup():
    text = format_clipboard(make_property())
    assert "*" not in text
    assert "#PropertyForSale" not in text
    assert "🔢 Property Code: NA007" in text
    assert text.endswith("🏢 Magixland Real Estate")


def test_missing_values_render_na():
    prop = make_property(
        property_code=None, price=None, bedrooms=None, area=None,
        agent=None, project=None, address=None,
    )
    text = format_clipboard(prop)
    assert f"Property Code: {NA}" in text
    assert f"Price: {NA}" in text
    assert f"Location: {NA}" in text
    assert f"Bedrooms: {NA}" in text
    assert f"Agent: {NA}" in text
    assert "Address:" not in text
    assert "Description" not in text


def test_zero_bedrooms_is_not_na():
    text = format_clipboard(make_property(bedrooms=0))
    assert "Bedrooms: 0" in text


def test_broker_without_name_is_omitted():
    text = format_clipboard(make_property(broker_details=contact(phone="12345")))
    assert "Broker" not in text


def test_rendering_is_deterministic():
    prop = make_property()
    assert format_whatsapp(prop) == format_whatsapp(prop)


def test_requirement_share_text():
    req = make_requirement(assigned_agent=AgentRef(name="Ravi Kumar"), bathrooms=None)
    text = render_requirement_share(req, ShareFormat.whatsapp)

    assert text.startswith("📋 *2BHK near metro*")
    assert "👤 *Customer:* Meera Iyer" in text
    assert "💰 *Budget:* ₹60,00,000" in text
    assert "🚿 *Bathrooms:* Not specified" in text
    assert "  • Baner\n  • Aundh" in text
    assert "🚨 *Priority:* High" in text
    assert "👨‍💼 *Assigned Agent:* Ravi Kumar" in text
    assert text.endswith("#PropertyRequirement #RealEstate #Magixland")


def test_whatsapp_share_url():
    text = "🏠 *Villa*\n\nStatus: Sold"
    url = whatsapp_share_url(text)
    assert url.startswith("https://wa.me/?text=")
    assert "\n" not in url
    assert unquote(url.split("text=", 1)[1]) == text
