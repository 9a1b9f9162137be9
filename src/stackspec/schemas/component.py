"""UI component models.

Components nest through ``children``. Many types carry typed props;
every other type accepts an open ``props`` mapping. Typed props keep unknown
keys in ``model_extra`` so renderer-specific options survive validation.
"""

from __future__ import annotations

from typing import Any, Callable, Literal, get_args

from pydantic import ConfigDict, Field

from stackspec.schemas.common import SpecModel, UrlString

ComponentType = Literal[
    # Layout
    "card",
    "tabs",
    "accordion",
    "modal",
    "drawer",
    "container",
    "divider",
    "space",
    "grid",
    "flex",
    # Navigation
    "breadcrumb",
    "stepper",
    "menu",
    "sidebar",
    "pagination",
    "dropdown",
    # Data display
    "table",
    "list",
    "tree",
    "description",
    "statistic",
    "tag",
    "collapse",
    "carousel",
    "image",
    "avatar",
    "calendar_view",
    # Data entry
    "form",
    "input",
    "select",
    "checkbox",
    "radio",
    "switch",
    "slider",
    "date_picker",
    "time_picker",
    "upload",
    "autocomplete",
    "cascader",
    "transfer",
    "color_picker",
    "rate",
    # Feedback
    "alert",
    "message",
    "notification",
    "progress",
    "skeleton",
    "spin",
    "result",
    "empty",
    # Interaction
    "button",
    "button_group",
    "icon_button",
    "split_button",
    # Overlay
    "tooltip",
    "popover",
    "dialog",
    "confirm",
    # Other
    "badge",
    "timeline",
    "steps",
    "anchor",
    "back_top",
    "watermark",
    "qrcode",
]

COMPONENT_TYPES: tuple[str, ...] = get_args(ComponentType)

Size = Literal["small", "medium", "large"]
PanelSize = Literal["small", "medium", "large", "full"]
Placement = Literal["top", "bottom", "left", "right"]


class PropsModel(SpecModel):
    """Typed props; unknown keys are kept in ``model_extra``."""

    model_config = ConfigDict(extra="allow")


class BaseComponent(SpecModel):
    """Fields shared by every component."""

    events: dict[str, Callable[..., Any]] | None = Field(default=None, description="Event handlers")
    style: dict[str, str] | None = Field(default=None, description="Custom styles")
    children: list[BaseComponent] | None = Field(default=None, description="Child components")


class GenericComponent(BaseComponent):
    """Any component type without a typed props model."""

    type: ComponentType
    props: dict[str, Any] | None = Field(default=None, description="Component properties")


class CardProps(PropsModel):
    title: str | None = None
    subtitle: str | None = None
    image: UrlString | None = Field(default=None, description="Card image URL")
    actions: list[Any] | None = None


class CardComponent(BaseComponent):
    """Groups content under an optional header, image, and actions."""

    type: Literal["card"]
    props: CardProps | None = None


class ModalProps(PropsModel):
    title: str | None = None
    size: PanelSize | None = None
    close_on_overlay: bool | None = None
    show_close: bool | None = None


class ModalComponent(BaseComponent):
    """Centered dialog overlay."""

    type: Literal["modal"]
    props: ModalProps | None = None


class DrawerProps(PropsModel):
    title: str | None = None
    position: Placement | None = None
    size: PanelSize | None = None
    close_on_overlay: bool | None = None


class DrawerComponent(BaseComponent):
    """Panel sliding in from a screen edge."""

    type: Literal["drawer"]
    props: DrawerProps | None = None


# Component definitions embedded in props (tab panels, accordion sections,
# timeline events, stepper steps) are kept as plain mappings; only ``children``
# is walked as part of the tree.
EmbeddedComponent = dict[str, Any]


class TabItem(SpecModel):
    label: str
    icon: str | None = None
    content: EmbeddedComponent | None = Field(default=None, description="Tab content component")


class TabsProps(PropsModel):
    tabs: list[TabItem] = Field(..., description="Tab items")
    default_tab: int | None = Field(default=None, ge=0, description="Default active tab index")


class TabsComponent(BaseComponent):
    """Switches between content panels."""

    type: Literal["tabs"]
    props: TabsProps


class AccordionItem(SpecModel):
    title: str
    icon: str | None = None
    content: EmbeddedComponent | None = None
    default_expanded: bool | None = None


class AccordionProps(PropsModel):
    items: list[AccordionItem] = Field(..., description="Accordion items")
    allow_multiple: bool | None = None


class AccordionComponent(BaseComponent):
    """Expandable and collapsible sections."""

    type: Literal["accordion"]
    props: AccordionProps


class TimelineItem(SpecModel):
    title: str
    timestamp: str | None = None
    description: str | None = None
    icon: str | None = None
    content: EmbeddedComponent | None = None


class TimelineProps(PropsModel):
    items: list[TimelineItem] = Field(..., description="Timeline items")
    orientation: Literal["vertical", "horizontal"] | None = None


class TimelineComponent(BaseComponent):
    """Chronological display of events."""

    type: Literal["timeline"]
    props: TimelineProps


class StepperStep(SpecModel):
    label: str
    description: str | None = None
    icon: str | None = None
    content: EmbeddedComponent | None = None


class StepperProps(PropsModel):
    steps: list[StepperStep] = Field(..., description="Stepper steps")
    current_step: int | None = Field(default=None, ge=0, description="Current step index")
    orientation: Literal["horizontal", "vertical"] | None = None


class StepperComponent(BaseComponent):
    """Multi-step process indicator."""

    type: Literal["stepper"]
    props: StepperProps


class BreadcrumbItem(SpecModel):
    label: str
    href: str | None = None
    icon: str | None = None


class BreadcrumbProps(PropsModel):
    items: list[BreadcrumbItem] = Field(..., description="Breadcrumb items")
    separator: str | None = None


class BreadcrumbComponent(BaseComponent):
    type: Literal["breadcrumb"]
    props: BreadcrumbProps


class AlertProps(PropsModel):
    title: str | None = None
    message: str = Field(..., description="Alert message")
    variant: Literal["info", "success", "warning", "error"] | None = None
    dismissible: bool | None = None
    icon: str | None = None


class AlertComponent(BaseComponent):
    type: Literal["alert"]
    props: AlertProps


class BadgeProps(PropsModel):
    label: str
    variant: Literal["primary", "secondary", "success", "warning", "error", "info"] | None = None
    icon: str | None = None
    size: Size | None = None


class BadgeComponent(BaseComponent):
    type: Literal["badge"]
    props: BadgeProps


class TooltipProps(PropsModel):
    content: str = Field(..., description="Tooltip content")
    position: Placement | None = None
    delay: float | None = Field(default=None, description="Show delay in milliseconds")


class TooltipComponent(BaseComponent):
    type: Literal["tooltip"]
    props: TooltipProps


class PopoverProps(PropsModel):
    title: str | None = None
    trigger: Literal["click", "hover"] | None = None
    position: Placement | None = None
    close_on_outside_click: bool | None = None


class PopoverComponent(BaseComponent):
    type: Literal["popover"]
    props: PopoverProps | None = None


class TableColumn(SpecModel):
    key: str
    label: str
    width: float | None = None
    sortable: bool | None = None
    filterable: bool | None = None
    fixed: Literal["left", "right"] | None = None
    data_type: Literal["text", "number", "date", "boolean", "currency", "percent"] | None = None


class TablePagination(SpecModel):
    page_size: int = Field(default=10, description="Page size")
    show_size_changer: bool | None = None
    page_size_options: list[int] | None = None


class TableSelection(SpecModel):
    type: Literal["checkbox", "radio"]
    selected_keys: list[str] | None = None


class TableProps(PropsModel):
    columns: list[TableColumn] = Field(..., description="Table columns")
    data_source: str | None = Field(default=None, description="Data source reference or object name")
    pagination: TablePagination | None = None
    selection: TableSelection | None = None
    row_actions: list[Any] | None = None
    size: Size | None = None
    bordered: bool | None = None
    striped: bool | None = None


class TableComponent(BaseComponent):
    """Tabular data with columns, pagination, and row selection."""

    type: Literal["table"]
    props: TableProps


class FormField(SpecModel):
    name: str
    label: str
    type: str
    required: bool | None = None
    placeholder: str | None = None
    default_value: Any = None
    validation: dict[str, Any] | None = None


class FormButton(SpecModel):
    label: str
    variant: Literal["primary", "secondary", "success", "danger"] | None = None


class FormProps(PropsModel):
    layout: Literal["horizontal", "vertical", "inline"] | None = None
    fields: list[FormField] | None = None
    submit_button: FormButton | None = None
    cancel_button: FormButton | None = None
    label_width: float | None = None
    label_align: Literal["left", "right"] | None = None


class FormComponent(BaseComponent):
    type: Literal["form"]
    props: FormProps | None = None


class MenuItem(SpecModel):
    key: str
    label: str
    icon: str | None = None
    href: str | None = None
    disabled: bool | None = None
    children: list[Any] | None = Field(default=None, description="Submenu items")


class MenuProps(PropsModel):
    items: list[MenuItem] = Field(..., description="Menu items")
    mode: Literal["horizontal", "vertical", "inline"] | None = None
    theme: Literal["light", "dark"] | None = None
    default_selected_keys: list[str] | None = None
    default_open_keys: list[str] | None = None
    collapsible: bool | None = None
    collapsed: bool | None = None


class MenuComponent(BaseComponent):
    type: Literal["menu"]
    props: MenuProps


class TreeDataNode(SpecModel):
    title: str
    key: str
    icon: str | None = None
    disabled: bool | None = None
    children: list[Any] | None = Field(default=None, description="Child nodes")


class TreeProps(PropsModel):
    tree_data: list[TreeDataNode] | None = None
    checkable: bool | None = None
    selectable: bool | None = None
    multiple: bool | None = None
    default_expanded_keys: list[str] | None = None
    default_selected_keys: list[str] | None = None
    default_checked_keys: list[str] | None = None
    show_line: bool | None = None
    show_icon: bool | None = None


class TreeComponent(BaseComponent):
    """Hierarchical data display (the data lives in ``treeData``)."""

    type: Literal["tree"]
    props: TreeProps | None = None


class UploadProps(PropsModel):
    action: str | None = Field(default=None, description="Upload URL")
    accept: str | None = None
    multiple: bool | None = None
    max_size: float | None = None
    max_count: int | None = None
    list_type: Literal["text", "picture", "picture-card"] | None = None
    show_upload_list: bool | None = None
    disabled: bool | None = None


class UploadComponent(BaseComponent):
    type: Literal["upload"]
    props: UploadProps | None = None


class ButtonProps(PropsModel):
    label: str
    variant: Literal["primary", "secondary", "success", "warning", "danger", "text", "link"] | None = None
    icon: str | None = None
    icon_position: Literal["left", "right"] | None = None
    size: Size | None = None
    loading: bool | None = None
    disabled: bool | None = None
    block: bool | None = None
    danger: bool | None = None
    shape: Literal["default", "circle", "round"] | None = None


class ButtonComponent(BaseComponent):
    type: Literal["button"]
    props: ButtonProps


class InputProps(PropsModel):
    type: Literal["text", "password", "email", "number", "tel", "url", "search", "textarea"] | None = None
    placeholder: str | None = None
    default_value: str | None = None
    size: Size | None = None
    disabled: bool | None = None
    readonly: bool | None = None
    max_length: int | None = None
    show_count: bool | None = None
    prefix: str | None = None
    suffix: str | None = None
    allow_clear: bool | None = None
    rows: int | None = None


class InputComponent(BaseComponent):
    type: Literal["input"]
    props: InputProps | None = None


class SelectOption(SpecModel):
    label: str
    value: Any
    disabled: bool | None = None
    icon: str | None = None


class SelectProps(PropsModel):
    options: list[SelectOption]
    placeholder: str | None = None
    default_value: Any = None
    multiple: bool | None = None
    searchable: bool | None = None
    allow_clear: bool | None = None
    size: Size | None = None
    disabled: bool | None = None
    loading: bool | None = None


class SelectComponent(BaseComponent):
    type: Literal["select"]
    props: SelectProps


class ListPagination(SpecModel):
    page_size: int
    total: int | None = None


class ListProps(PropsModel):
    data_source: str | None = None
    item_layout: Literal["horizontal", "vertical"] | None = None
    bordered: bool | None = None
    size: Size | None = None
    split: bool | None = None
    loading: bool | None = None
    pagination: ListPagination | None = None


class ListComponent(BaseComponent):
    type: Literal["list"]
    props: ListProps | None = None


class ProgressProps(PropsModel):
    percent: float = Field(..., ge=0, le=100, description="Progress percentage")
    type: Literal["line", "circle", "dashboard"] | None = None
    status: Literal["normal", "active", "success", "exception"] | None = None
    show_info: bool | None = None
    stroke_width: float | None = None
    stroke_color: str | None = None


class ProgressComponent(BaseComponent):
    type: Literal["progress"]
    props: ProgressProps


class PaginationProps(PropsModel):
    total: int = Field(..., description="Total items")
    page_size: int = Field(default=10, description="Items per page")
    current: int = Field(default=1, description="Current page")
    show_size_changer: bool | None = None
    page_size_options: list[int] | None = None
    show_quick_jumper: bool | None = None
    show_total: bool | None = None
    simple: bool | None = None
    size: Size | None = None


class PaginationComponent(BaseComponent):
    type: Literal["pagination"]
    props: PaginationProps


TYPED_COMPONENTS: tuple[type[BaseComponent], ...] = (
    CardComponent,
    TabsComponent,
    AccordionComponent,
    ModalComponent,
    DrawerComponent,
    TimelineComponent,
    StepperComponent,
    BreadcrumbComponent,
    AlertComponent,
    BadgeComponent,
    TooltipComponent,
    PopoverComponent,
    TableComponent,
    FormComponent,
    MenuComponent,
    ButtonComponent,
    InputComponent,
    SelectComponent,
    ListComponent,
    TreeComponent,
    ProgressComponent,
    PaginationComponent,
    UploadComponent,
)
