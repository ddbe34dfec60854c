"""Options form for configuring a marker display."""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from rowmarkers.core.config import FORM_VIEW_MODE_FALLBACK, RENDERED_ENTITY
from rowmarkers.core.errors import OptionsFormError
from rowmarkers.core.interfaces import DisplayModeRepository
from rowmarkers.core.models import FieldHandler, MarkerOptions

NO_GEO_FIELD_MESSAGE = "Please add at least one geofield to the view."


@dataclass
class SelectElement:
    """A single-select form element."""
    name: str
    title: str
    description: str
    options: Dict[str, str]
    default_value: str = ""
    required: bool = False
    empty_value: Optional[str] = None
    # (element name, value) that must be selected for this element to show
    visible_when: Optional[Tuple[str, str]] = None

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        if self.visible_when is None:
            return True
        other, expected = self.visible_when
        return values.get(other) == expected

    def clean(self, value: Any) -> str:
        """Check a submitted value against the element's choices."""
        value = "" if value is None else str(value)
        if value == "" or value == self.empty_value:
            if self.required:
                raise OptionsFormError(self.name, f"{self.title} field is required.")
            return ""
        if value not in self.options:
            raise OptionsFormError(self.name, "An illegal choice has been detected.")
        return value


@dataclass
class OptionsForm:
    """Description of the marker options form."""
    elements: Dict[str, SelectElement] = field(default_factory=dict)
    error: Optional[str] = None

    def submit(self, values: Mapping[str, Any], options: Optional[MarkerOptions] = None) -> MarkerOptions:
        """
        Turn submitted form values into marker options.

        Args:
            values: Submitted values keyed by element name
            options: Current options; elements that are hidden or absent keep their value

        Returns:
            New MarkerOptions

        Raises:
            OptionsFormError: If the form has no usable geo field or a value is invalid
        """
        if self.error:
            raise OptionsFormError("geo_field_id", self.error)

        options = options or MarkerOptions()
        changes = {}
        for name, element in self.elements.items():
            if not element.is_visible(values):
                continue
            changes[name] = element.clean(values.get(name))

        # An unset view mode keeps the persisted default
        if not changes.get("view_mode"):
            changes.pop("view_mode", None)

        return replace(options, **changes)


def partition_fields(handlers: Iterable[FieldHandler]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Split the listing's fields into all fields and geo-capable fields.

    Args:
        handlers: Field handlers in listing order

    Returns:
        Tuple of (all fields, geo fields), each mapping field id to label
    """
    fields = {}
    geo_fields = {}
    for handler in handlers:
        fields[handler.field_id] = handler.label
        if handler.geo_kind is not None:
            geo_fields[handler.field_id] = handler.label
    return fields, geo_fields


def build_options_form(
    handlers: Iterable[FieldHandler],
    options: MarkerOptions,
    entity_type_id: Optional[str] = None,
    display_modes: Optional[DisplayModeRepository] = None,
) -> OptionsForm:
    """
    Build the options form of a marker display.

    Args:
        handlers: Field handlers configured on the listing
        options: Current marker options, used as default values
        entity_type_id: Entity type owning the listing's base table, if any
        display_modes: View mode registry, needed when entity_type_id is given

    Returns:
        OptionsForm, carrying only an error when the listing has no geo field
    """
    fields, geo_fields = partition_fields(handlers)

    if not geo_fields:
        return OptionsForm(error=NO_GEO_FIELD_MESSAGE)

    form = OptionsForm()
    form.elements["geo_field_id"] = SelectElement(
        name="geo_field_id",
        title="Data Source",
        description="Which field contains geodata?",
        options=geo_fields,
        default_value=options.geo_field_id,
        required=True,
    )

    form.elements["name_field_id"] = SelectElement(
        name="name_field_id",
        title="Title Field",
        description="Choose the field which will appear as a title on tooltips.",
        options=dict(fields),
        default_value=options.name_field_id,
        empty_value="",
    )

    description_options = dict(fields)
    if entity_type_id:
        description_options[RENDERED_ENTITY] = f"<Rendered {entity_type_id} entity>"

    form.elements["description_field_id"] = SelectElement(
        name="description_field_id",
        title="Description Field",
        description="Choose the field or rendering method which will appear as a description on tooltips or popups.",
        options=description_options,
        default_value=options.description_field_id,
        empty_value="",
    )

    if entity_type_id:
        view_modes = display_modes.get_view_modes(entity_type_id) if display_modes else {}
        form.elements["view_mode"] = SelectElement(
            name="view_mode",
            title="View mode",
            description="View modes are ways of displaying entities.",
            options={key: mode.get("label", key) for key, mode in view_modes.items()},
            default_value=options.view_mode or FORM_VIEW_MODE_FALLBACK,
            visible_when=("description_field_id", RENDERED_ENTITY),
        )

    return form
