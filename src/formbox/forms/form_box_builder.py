"""
FormBoxBuilder: lays out one labelled row per field of a record.

The builder decides which control each field needs from the record
class's metadata (see ``SchemaProvider.describe``), so a form is written
as a list of field names plus the odd option:

    form = FormBoxBuilder("product", product, provider=provider)
    form.field("name", required=True)
    form.field("category", show="full_name")
    form.field("notified", radio=True)
    form.field("published_on")
    form.submit("Save")

Every row follows the same structure (object names in brackets, where
$FORM and $FIELD are the form and field names):

    row   [irow_$FORM_$FIELD]
      label [label_$FORM_$FIELD]   (omitted with no_label=True)
      input area                   (property class="input")
        control [$FORM_$FIELD]

Subclasses can change the row container by overriding ``wrap_row``.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional
import html
import logging
import re

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QBoxLayout, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from formbox.exceptions import FieldError, FieldMetadataUnavailable, ProviderError
from formbox.protocols.form_config import FormBoxConfig, get_form_config
from formbox.protocols.schema_provider import SchemaProvider, get_schema_provider
from formbox.protocols.widget_adapters import PasswordEditAdapter, apply_char_width
from .layout_constants import CURRENT_LAYOUT, FormBoxLayoutConfig
from .render_options import RenderOptions
from .widget_dispatcher import WidgetDispatcher
from .widget_factory import WidgetFactory
from .widget_kinds import ResolvedWidget
from .widget_resolver import WidgetResolver

logger = logging.getLogger(__name__)

_FOREIGN_KEY_SUFFIX = re.compile(r"_id$")


class FormBoxBuilder(QWidget):
    """
    Form widget building labelled rows from record metadata.

    Args:
        object_name: Form name, used in every object name and as the
            prefix of nested value keys
        record: Record whose fields are shown (may be None)
        read_only: Render every field as constant text
        provider: Schema provider (defaults to the registered one)
        config: Form configuration (defaults to the global one)
        layout_config: Spacing and label width
        parent: Parent widget

    Signals:
        submitted(dict): Emitted by the submit button with ``values()``
    """

    submitted = pyqtSignal(dict)

    def __init__(self, object_name: str, record: Any = None, *,
                 read_only: bool = False,
                 provider: Optional[SchemaProvider] = None,
                 config: Optional[FormBoxConfig] = None,
                 layout_config: Optional[FormBoxLayoutConfig] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.object_name = object_name
        self.record = record
        self._read_only = read_only
        self.provider = provider or get_schema_provider()
        self.config = config or get_form_config()
        self.layout_config = layout_config or CURRENT_LAYOUT
        self.resolver = WidgetResolver(self.config)
        self.factory = WidgetFactory(self.config)

        # Editable controls keyed by the name their value is collected under
        self.widgets: Dict[str, QWidget] = {}
        self.rows: Dict[str, QWidget] = {}
        self.resolved: Dict[str, ResolvedWidget] = {}
        self.field_errors: Dict[str, FieldError] = {}
        self.nested: Dict[str, "FormBoxBuilder"] = {}

        self.setObjectName(f"form_{object_name}")
        self._layout = QVBoxLayout(self)
        self._layout.setSpacing(self.layout_config.main_layout_spacing)
        self._layout.setContentsMargins(*self.layout_config.main_layout_margins)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignTop)

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def record_class(self) -> Optional[type]:
        return None if self.record is None else type(self.record)

    def field_id(self, name: str) -> str:
        return f"{self.object_name}_{name}"

    # ==================== FIELDS ====================

    def field(self, name: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> QWidget:
        """
        Add the row for field ``name``.

        Options may be given as a mapping, as keyword arguments, or both
        (see RenderOptions for the recognized names).

        Returns:
            The row widget. For a field that fails to resolve this is an
            error row, unless the configured policy re-raises.

        Raises:
            FieldError: Only with ``field_error_policy="raise"``
        """
        opts = RenderOptions.from_kwargs(options, **kwargs)
        try:
            resolved = self.resolve_field(name, opts)
            control = self.factory.create_widget(resolved, self.field_id(name))
        except FieldError as error:
            return self._field_error_row(name, opts, error)

        self.resolved[name] = resolved
        if not resolved.is_constant:
            self.widgets[resolved.key] = control
        return self.wrap_row(name, self.label_for_field(name, opts), control)

    def resolve_field(self, name: str, options: RenderOptions) -> ResolvedWidget:
        """Describe and resolve ``name`` without creating any widget."""
        read_only = self.read_only or options.read_only
        try:
            descriptor = self.provider.describe(self.record_class, name)
            candidates = None
            if (descriptor.is_relation and not read_only and options.choices is None
                    and descriptor.target is not None):
                candidates = self.provider.candidates(descriptor.target)
        except ProviderError as error:
            raise FieldMetadataUnavailable(name, error) from error
        return self.resolver.resolve(descriptor, options, read_only, self.value_of(name), candidates)

    def value_of(self, name: str) -> Any:
        """Current value of ``name`` on the record (None when absent)."""
        if self.record is None:
            return None
        return getattr(self.record, name, None)

    def _field_error_row(self, name: str, options: RenderOptions, error: FieldError) -> QWidget:
        if self.config.field_error_policy == "raise":
            raise error
        logger.warning(f"Form '{self.object_name}': field '{name}' not rendered: {error}")
        self.field_errors[name] = error
        message = QLabel(html.escape(str(error)))
        message.setProperty("class", "field_error")
        message.setStyleSheet("color: #c00;")
        return self.wrap_row(name, self.label_for_field(name, options), message)

    def password(self, name: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> QWidget:
        """Add a masked text row for ``name``; the current value is never shown."""
        opts = RenderOptions.from_kwargs(options, **kwargs)
        control = PasswordEditAdapter()
        control.setObjectName(self.field_id(name))
        apply_char_width(control, opts.input_width)
        control.setReadOnly(self.read_only or opts.read_only)
        self.widgets[name] = control
        return self.wrap_row(name, self.label_for_field(name, opts), control)

    def submit(self, text: str = "Save changes") -> QWidget:
        """Add the submit row; clicking emits ``submitted`` with ``values()``."""
        button = QPushButton(text)
        button.setObjectName(f"{self.object_name}_commit")
        button.clicked.connect(lambda: self.submitted.emit(self.values()))
        return self.wrap_row("submit", None, button, input_class="input submit")

    @contextmanager
    def block(self, name: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> Iterator[QBoxLayout]:
        """
        Standard row whose input area the caller fills.

        Example:
            with form.block("dimensions", label="Size") as area:
                area.addWidget(width_edit)
                area.addWidget(height_edit)
        """
        opts = RenderOptions.from_kwargs(options, **kwargs)
        container = QWidget()
        area = QHBoxLayout(container)
        area.setContentsMargins(0, 0, 0, 0)
        area.setSpacing(self.layout_config.input_spacing)
        self.wrap_row(name, self.label_for_field(name, opts), container)
        yield area

    def fields_for(self, object_name: str, record: Any) -> "FormBoxBuilder":
        """
        Nested builder for an associated record.

        The nested form shares provider, configuration and read-only flag,
        is placed inline after the rows added so far, and contributes its
        values under ``object_name``.
        """
        nested = type(self)(
            object_name, record,
            read_only=self.read_only,
            provider=self.provider,
            config=self.config,
            layout_config=self.layout_config,
            parent=self,
        )
        nested._layout.setContentsMargins(0, 0, 0, 0)
        self.nested[object_name] = nested
        self._layout.addWidget(nested)
        return nested

    # ==================== LABELS AND ROWS ====================

    def label_for_field(self, name: str, options: Optional[RenderOptions] = None) -> Optional[QLabel]:
        """
        Label for field ``name``, or None with ``no_label``.

        The text is the ``label`` option or the configured label resolver
        applied to the name without a trailing ``_id``. Read-only forms
        append the read-only suffix; required fields get the required marker.
        """
        options = options or RenderOptions()
        if options.no_label:
            return None
        text = options.label
        if text is None:
            text = self.config.label_resolver(_FOREIGN_KEY_SUFFIX.sub("", name))
        text = html.escape(text)
        if self.read_only:
            text += html.escape(self.config.read_only_label_suffix)
        elif options.required:
            text += f'<span class="required" style="color:#c00;">{html.escape(self.config.required_marker)}</span>'

        label = QLabel(text)
        label.setObjectName(f"label_{self.field_id(name)}")
        label.setTextFormat(Qt.TextFormat.RichText)
        label.setProperty("class", "label")
        label.setProperty("for", self.field_id(name))
        if self.has_errors(name):
            label.setProperty("error", True)
            label.setStyleSheet("color: #c00;")
        if self.layout_config.label_width and not self.layout_config.stacked:
            label.setFixedWidth(self.layout_config.label_width)
        return label

    def has_errors(self, name: str) -> bool:
        """True when the record reports validation errors for ``name``."""
        errors = getattr(self.record, "errors", None) if self.record is not None else None
        if not errors:
            return False
        if isinstance(errors, Mapping):
            return bool(errors.get(name))
        return bool(getattr(errors, name, None))

    def wrap_row(self, name: str, label: Optional[QLabel], control: QWidget,
                 input_class: str = "input") -> QWidget:
        """Put ``label`` and ``control`` in a row and append it to the form."""
        row = QWidget()
        row.setObjectName(f"irow_{self.object_name}_{name}")
        row.setProperty("class", "irow")
        row_layout = QVBoxLayout(row) if self.layout_config.stacked else QHBoxLayout(row)
        row_layout.setSpacing(self.layout_config.row_spacing)
        row_layout.setContentsMargins(*self.layout_config.row_margins)

        if label is not None:
            label.setBuddy(control)
            row_layout.addWidget(label, 0, Qt.AlignmentFlag.AlignTop)

        input_area = QWidget()
        input_area.setProperty("class", input_class)
        input_layout = QHBoxLayout(input_area)
        input_layout.setContentsMargins(0, 0, 0, 0)
        input_layout.setSpacing(self.layout_config.input_spacing)
        input_layout.addWidget(control)
        input_layout.addStretch()
        row_layout.addWidget(input_area, 1)

        self.rows[name] = row
        self._layout.addWidget(row)
        return row

    # ==================== VALUES ====================

    def values(self) -> Dict[str, Any]:
        """
        Collect the values of every editable control.

        Belongs-to fields report under their foreign key, has-many fields
        as the list of checked identity keys, nested forms as a dict under
        their object name.
        """
        collected = {key: WidgetDispatcher.get_value(widget) for key, widget in self.widgets.items()}
        for object_name, nested in self.nested.items():
            collected[object_name] = nested.values()
        return collected
