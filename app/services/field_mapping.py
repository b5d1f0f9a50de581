"""Registration form → Notion property mapping

The column names on the right-hand side of REGISTRATION_FIELDS must match the
Notion database exactly (case-sensitive). Every column is produced on every
submission; missing form values fall back to the column default instead of
being dropped.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union
import math


class Rule(str, Enum):
    """How a form value is turned into a column value"""
    TEXT = "text"
    COMPOSITE = "composite"
    NUMBER = "number"
    CHOICE = "choice"
    LIST = "list"


class PropertyType(str, Enum):
    """Notion property types used by the registration database"""
    TITLE = "title"
    RICH_TEXT = "rich_text"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    DATE = "date"
    SELECT = "select"
    NUMBER = "number"


@dataclass(frozen=True)
class FieldRule:
    """One row of the mapping table: form key(s) → Notion column"""
    source: Union[str, Tuple[str, ...]]
    column: str
    type: PropertyType
    rule: Rule
    default: Any = None

    @property
    def source_keys(self) -> Tuple[str, ...]:
        if isinstance(self.source, tuple):
            return self.source
        return (self.source,)


LIST_SEPARATOR = ", "
NAME_SEPARATOR = " "


def _text(source: str, column: str, default: Optional[str] = "",
          property_type: PropertyType = PropertyType.RICH_TEXT) -> FieldRule:
    return FieldRule(source, column, property_type, Rule.TEXT, default)


def _choice(source: str, column: str, default: str = "No") -> FieldRule:
    return FieldRule(source, column, PropertyType.SELECT, Rule.CHOICE, default)


def _number(source: str, column: str) -> FieldRule:
    return FieldRule(source, column, PropertyType.NUMBER, Rule.NUMBER, 0)


REGISTRATION_FIELDS: Tuple[FieldRule, ...] = (
    # Registrant details
    FieldRule(("firstName", "lastName"), "Name", PropertyType.TITLE, Rule.COMPOSITE),
    _text("firstName", "First Name"),
    _text("lastName", "Last Name"),
    _text("preferredName", "Preferred Name", "N/A"),
    _text("email", "Email", None, PropertyType.EMAIL),
    _text("phoneNumber", "Phone Number", None, PropertyType.PHONE_NUMBER),
    _text("membershipNumber", "Membership #"),
    _text("membershipExpiry", "Membership Expiry", None, PropertyType.DATE),
    _text("chapterName", "Chapter", "Individual Member"),
    _text("mailingAddress", "Mailing Address"),

    # Additional info
    _text("emergencyContactName", "Emergency Contact"),
    _text("emergencyContactRelationship", "Emergency Contact Relationship"),
    _text("emergencyContactNumber", "Emergency Phone", None, PropertyType.PHONE_NUMBER),
    _choice("emergencyContactTravelling", "Emergency Contact Travelling"),
    _choice("firstSeminar", "First Seminar"),
    _choice("classAngel", "Class Angel"),
    _text("accommodations", "Accommodations"),

    # Class selections
    _text("sessionAChoice1", "Session A Choice 1", "N/A"),
    _text("sessionAChoice2", "Session A Choice 2", "N/A"),
    _text("sessionAChoice3", "Session A Choice 3", "N/A"),
    _text("sessionBChoice1", "Session B Choice 1", "N/A"),
    _text("sessionBChoice2", "Session B Choice 2", "N/A"),
    _text("sessionBChoice3", "Session B Choice 3", "N/A"),
    _text("optionsDayChoice1", "Options Day Choice 1", "N/A"),
    _text("optionsDayChoice2", "Options Day Choice 2", "N/A"),
    _text("optionsDayChoice3", "Options Day Choice 3", "N/A"),

    # Additional options
    # Stored as comma-joined text, not multi_select
    FieldRule("virtualClasses", "Virtual Classes", PropertyType.RICH_TEXT, Rule.LIST, "None"),
    _choice("eveningLecture", "Evening Lecture"),
    _number("eveningLectureTicketCount", "Evening Lecture Tickets"),
    _choice("buyOpeningReceptionTickets", "Opening Reception Tickets"),
    _number("openingReceptionTicketCount", "Opening Reception Ticket Count"),
    _text("openingReceptionGuestDetails", "Opening Reception Guest Details", "N/A"),
    _choice("buyLuncheonTickets", "Luncheon Tickets"),
    _number("luncheonTicketCount", "Luncheon Ticket Count"),
    _text("luncheonGuestDetails", "Luncheon Guest Details", "N/A"),
    _choice("buyBanquetTickets", "Banquet Tickets"),
    _number("banquetTicketCount", "Banquet Ticket Count"),
    _text("banquetGuestDetails", "Banquet Guest Details", "N/A"),
    _choice("marketNightMemberType", "Market Night Member Type", "N/A"),
    _text("marketNightBusinessName", "Market Night Business Name", "N/A"),
    _text("marketNightMerchDesc", "Market Night Merch Desc", "N/A"),

    # Financials & payment
    _number("estimatedTotal", "Estimated Total"),
    _choice("depositPaymentMethod", "Payment Method", "Not specified"),
    _choice("installmentPayments", "Installment Plan"),
)

COLUMN_NAMES = tuple(field.column for field in REGISTRATION_FIELDS)
SOURCE_KEYS = frozenset(key for field in REGISTRATION_FIELDS for key in field.source_keys)


def _is_blank(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    # 0 and NaN are falsy form values too
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


def to_text(value: Any, default: Optional[str]) -> Optional[str]:
    """Copy a scalar verbatim, substituting the default when blank"""
    if _is_blank(value):
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def to_number(value: Any) -> Union[int, float]:
    """
    Coerce a form value to a number

    Anything that cannot be read as a finite number becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
    else:
        return 0

    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return number


def join_list(value: Any, placeholder: str) -> str:
    """Join list items with ', '; an empty or missing list yields the placeholder"""
    if isinstance(value, (list, tuple)):
        joined = LIST_SEPARATOR.join(
            item if isinstance(item, str) else str(item)
            for item in value
            if item is not None
        )
        return joined or placeholder
    text = to_text(value, placeholder)
    return text if text is not None else placeholder


def display_name(submission: Mapping[str, Any], keys: Tuple[str, ...]) -> str:
    """Concatenate the name parts with a single space, blanks included"""
    return NAME_SEPARATOR.join(to_text(submission.get(key), "") for key in keys)


def resolve_value(field: FieldRule, submission: Mapping[str, Any]) -> Any:
    """Apply a field's rule to the submission and return the plain column value"""
    if field.rule is Rule.COMPOSITE:
        return display_name(submission, field.source_keys)

    value = submission.get(field.source)
    if field.rule is Rule.NUMBER:
        return to_number(value)
    if field.rule is Rule.LIST:
        return join_list(value, field.default)
    # TEXT and CHOICE share the copy-or-default behaviour; the option name is
    # validated by Notion, not here.
    return to_text(value, field.default)


def _rich_text(content: str) -> list:
    return [{"text": {"content": content}}]


def to_property(property_type: PropertyType, value: Any) -> Dict[str, Any]:
    """Wrap a plain value in the Notion property shape for its type"""
    if property_type is PropertyType.TITLE:
        return {"title": _rich_text(value)}
    if property_type is PropertyType.RICH_TEXT:
        return {"rich_text": _rich_text(value)}
    if property_type is PropertyType.EMAIL:
        return {"email": value}
    if property_type is PropertyType.PHONE_NUMBER:
        return {"phone_number": value}
    if property_type is PropertyType.DATE:
        return {"date": {"start": value}}
    if property_type is PropertyType.SELECT:
        return {"select": {"name": value}}
    if property_type is PropertyType.NUMBER:
        return {"number": value}
    raise ValueError(f"Unsupported Notion property type: {property_type}")


def build_properties(
    submission: Optional[Mapping[str, Any]],
    fields: Tuple[FieldRule, ...] = REGISTRATION_FIELDS
) -> Dict[str, Dict[str, Any]]:
    """
    Build the Notion `properties` object for one registration

    Args:
        submission: Raw form payload (unknown keys are ignored)
        fields: Mapping table to apply

    Returns:
        Dict keyed by Notion column name, one entry per field in the table
    """
    submission = submission or {}
    return {
        field.column: to_property(field.type, resolve_value(field, submission))
        for field in fields
    }
