"""
Textes de partage d'une propriété ou d'un besoin client.

Un seul gabarit par type d'enregistrement ; le format de sortie décide
de la mise en gras WhatsApp (*...*) et du pied de page avec hashtags.
"""
from enum import Enum
from typing import List, Optional
from urllib.parse import quote

from app.models import Property, Requirement
from app.services.property_filters import enum_value

NA = "N/A"
NOT_SPECIFIED = "Not specified"
BOLD = "*"
WHATSAPP_URL = "https://wa.me/?text="
DEFAULT_AGENCY = "Magixland Real Estate"
PROPERTY_HASHTAGS = "#PropertyForSale #RealEstate #Magixland"
REQUIREMENT_HASHTAGS = "#PropertyRequirement #RealEstate #Magixland"


class ShareFormat(str, Enum):
    whatsapp = "whatsapp"
    clipboard = "clipboard"


def format_number(value: float) -> str:
    """1200.0 -> '1200', 416.5 -> '416.5'"""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0")


def format_inr(value: float) -> str:
    """Montant au format indien : 1234567.5 -> '12,34,567.5'"""
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    fraction = fraction.rstrip("0")
    return f"{sign}{whole}.{fraction}" if fraction else f"{sign}{whole}"


def _capitalize(value) -> Optional[str]:
    value = enum_value(value)
    return value[:1].upper() + value[1:] if value else None


def _or(value, default: str = NA) -> str:
    if value is None or value == "":
        return default
    return str(value)


class ShareTextBuilder:
    """Assemble des sections séparées par une ligne vide"""

    def __init__(self, fmt: ShareFormat):
        self.decorate = fmt == ShareFormat.whatsapp
        self.sections: List[List[str]] = []

    def bold(self, text: str) -> str:
        return f"{BOLD}{text}{BOLD}" if self.decorate else text

    def field(self, icon: str, label: str, value: str) -> str:
        return f"{icon} {self.bold(label + ':')} {value}"

    def section(self, *lines: Optional[str]) -> "ShareTextBuilder":
        lines = [line for line in lines if line]
        if lines:
            self.sections.append(lines)
        return self

    def block(self, icon: str, label: str, value: Optional[str]) -> "ShareTextBuilder":
        """Bloc multi-lignes omis si la valeur est vide"""
        if value:
            self.section(f"{icon} {self.bold(label + ':')}", value)
        return self

    def footer(self, agency: str, hashtags: str) -> "ShareTextBuilder":
        return self.section(
            f"🏢 {self.bold(agency)}",
            hashtags if self.decorate else None
        )

    def build(self) -> str:
        return "\n\n".join("\n".join(lines) for lines in self.sections)


def render_property_share(
    prop: Property,
    fmt: ShareFormat = ShareFormat.whatsapp,
    agency: str = DEFAULT_AGENCY
) -> str:
    b = ShareTextBuilder(fmt)

    location = NA
    if prop.project and prop.project.name:
        location = prop.project.name
        if prop.project.location:
            location += f", {prop.project.location}"

    b.section(f"🏠 {b.bold(prop.title)}")
    b.section(
        b.field("🔢", "Property Code", _or(prop.property_code)),
        b.field("💰", "Price", f"₹{format_inr(prop.price)}" if prop.price is not None else NA),
        b.field("📍", "Location", location),
        b.field("🏡", "Type", _or(prop.type)),
        b.field("🛏️", "Bedrooms", _or(prop.bedrooms)),
        b.field("🚿", "Bathrooms", _or(prop.bathrooms)),
        b.field("📐", "Area", f"{format_number(prop.area)} sqft" if prop.area is not None else NA),
        b.field("👨‍💼", "Agent", _or(prop.agent.name if prop.agent else None)),
        b.field("📧", "Contact", _or(prop.agent.email if prop.agent else None)),
    )
    b.block("📝", "Description", prop.description)
    b.block("📍", "Address", prop.address)
    b.block("🌐", "Location URL", prop.location_url)

    owner = prop.owner_details
    if owner and owner.name:
        b.section(
            b.field("👤", "Owner", owner.name),
            b.field("📞", "Owner Phone", _or(owner.phone)),
        )
    broker = prop.broker_details
    if broker and broker.name:
        b.section(
            b.field("🏢", "Broker", broker.name),
            b.field("📞", "Broker Phone", _or(broker.phone)),
        )

    b.section(b.field(
        "💰", "Price per Sq Ft",
        f"₹{format_inr(prop.price_per_sqft)}" if prop.price_per_sqft is not None else NA
    ))
    b.section(f"Status: {_or(_capitalize(prop.status))}")
    b.footer(agency, PROPERTY_HASHTAGS)
    return b.build()


def render_requirement_share(
    req: Requirement,
    fmt: ShareFormat = ShareFormat.whatsapp,
    agency: str = DEFAULT_AGENCY
) -> str:
    b = ShareTextBuilder(fmt)

    b.section(f"📋 {b.bold(req.title)}")
    b.section(
        b.field("👤", "Customer", _or(req.customer_name)),
        b.field("📞", "Phone", _or(req.customer_phone)),
        b.field("📧", "Email", req.customer_email) if req.customer_email else None,
    )
    b.section(
        b.field("🏡", "Property Type", _or(req.property_type)),
        b.field("💰", "Budget", f"₹{format_inr(req.price)}" if req.price is not None else NOT_SPECIFIED),
        b.field("🛏️", "Bedrooms", _or(req.bedrooms, NOT_SPECIFIED)),
        b.field("🚿", "Bathrooms", _or(req.bathrooms, NOT_SPECIFIED)),
        b.field("📐", "Area", f"{format_number(req.area)} sqft" if req.area is not None else NOT_SPECIFIED),
    )
    locations = "\n".join(f"  • {loc}" for loc in req.preferred_locations) or NOT_SPECIFIED
    b.section(f"📍 {b.bold('Preferred Locations:')}", locations)
    b.section(
        b.field("🚨", "Priority", _or(_capitalize(req.priority))),
        b.field("📊", "Status", _or(_capitalize(req.status))),
    )
    b.block("📝", "Description", req.description)
    b.block("📌", "Notes", req.notes)
    if req.assigned_agent and req.assigned_agent.name:
        b.section(b.field("👨‍💼", "Assigned Agent", req.assigned_agent.name))
    b.footer(agency, REQUIREMENT_HASHTAGS)
    return b.build()


def format_whatsapp(prop: Property, agency: str = DEFAULT_AGENCY) -> str:
    return render_property_share(prop, ShareFormat.whatsapp, agency)


def format_clipboard(prop: Property, agency: str = DEFAULT_AGENCY) -> str:
    return render_property_share(prop, ShareFormat.clipboard, agency)


def whatsapp_share_url(text: str) -> str:
    """Lien wa.me pré-rempli"""
    return WHATSAPP_URL + quote(text, safe="")
