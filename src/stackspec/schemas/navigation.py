"""Navigation item and application models.

Navigation item IDs are used in URLs and configuration and must be lowercase
snake_case (``menu_accounts``, ``nav_settings``).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from stackspec.schemas.common import AriaProps, I18nLabel, SnakeCaseIdentifier, SpecModel


class BaseNavItem(SpecModel):
    """Properties shared by every navigation item type."""

    id: SnakeCaseIdentifier = Field(..., description="Unique identifier for this navigation item")
    label: I18nLabel = Field(..., description="Display label")
    icon: str | None = Field(default=None, description="Icon name")
    visible: str | None = Field(default=None, description="Visibility formula condition")


class ObjectNavItem(BaseNavItem):
    """Navigates to an object's list view; may hold child items (e.g. views)."""

    type: Literal["object"]
    object_name: str = Field(..., description="Target object name")
    view_name: str | None = Field(default=None, description="Default list view to open")
    children: list[NavigationItem] | None = Field(default=None, description="Child navigation items")


class DashboardNavItem(BaseNavItem):
    """Navigates to a dashboard."""

    type: Literal["dashboard"]
    dashboard_name: str = Field(..., description="Target dashboard name")


class PageNavItem(BaseNavItem):
    """Navigates to a custom page component."""

    type: Literal["page"]
    page_name: str = Field(..., description="Target custom page component name")
    params: dict[str, Any] | None = Field(default=None, description="Parameters passed to the page context")


class UrlNavItem(BaseNavItem):
    """Navigates to an external or absolute URL."""

    type: Literal["url"]
    url: str = Field(..., description="Target external URL")
    target: Literal["_self", "_blank"] = Field(default="_self", description="Link target window")


class InterfaceNavItem(BaseNavItem):
    """Navigates to an interface, optionally to one of its pages."""

    type: Literal["interface"]
    interface_name: str = Field(..., description="Target interface name")
    page_name: str | None = Field(default=None, description="Specific page within the interface to open")


class GroupNavItem(BaseNavItem):
    """A sub-menu; does not navigate itself."""

    type: Literal["group"]
    expanded: bool = Field(default=False, description="Default expansion state in sidebar")
    children: list[NavigationItem] = Field(..., description="Child navigation items")


NavigationItem = Annotated[
    Union[ObjectNavItem, DashboardNavItem, PageNavItem, UrlNavItem, InterfaceNavItem, GroupNavItem],
    Field(discriminator="type"),
]

ObjectNavItem.model_rebuild()
GroupNavItem.model_rebuild()


class AppBranding(SpecModel):
    """Look and feel overrides for a single app."""

    primary_color: str | None = Field(default=None, description="Primary theme color hex code")
    logo: str | None = Field(default=None, description="Custom logo URL")
    favicon: str | None = Field(default=None, description="Custom favicon URL")


class MobileNavigation(SpecModel):
    """Mobile-specific navigation configuration."""

    mode: Literal["drawer", "bottom_nav", "hamburger"] = Field(default="drawer", description="Mobile navigation mode")
    bottom_nav_items: list[str] | None = Field(default=None, description="Navigation item IDs for the bottom bar")


class App(SpecModel):
    """A business application container: navigation, branding, and access.

    Attributes:
        name: Machine name, lowercase snake_case (``app_crm``).
        label: Display label.
        active: Whether the app is enabled.
        is_default: Whether new users land in this app.
        interfaces: Interface names whose pages make up the sidebar.
        navigation: Global utility navigation tree rendered below the interfaces.
        home_page_id: ID of the navigation item used as landing page.
    """

    name: SnakeCaseIdentifier = Field(..., description="App unique machine name")
    label: I18nLabel = Field(..., description="App display label")
    version: str | None = Field(default=None, description="App version")
    description: I18nLabel | None = Field(default=None, description="App description")
    icon: str | None = Field(default=None, description="App icon used in the App Launcher")
    branding: AppBranding | None = Field(default=None, description="App-specific branding")
    active: bool = Field(default=True, description="Whether the app is enabled")
    is_default: bool = Field(default=False, description="Is default app")
    interfaces: list[str] | None = Field(default=None, description="Interface names available in this app")
    default_interface: str | None = Field(default=None, description="Interface shown when the app opens")
    navigation: list[NavigationItem] | None = Field(default=None, description="Global utility navigation items")
    home_page_id: str | None = Field(default=None, description="ID of the navigation item serving as landing page")
    required_permissions: list[str] | None = Field(default=None, description="Permissions required to access this app")
    objects: list[Any] | None = Field(default=None, description="Objects belonging to this app")
    apis: list[Any] | None = Field(default=None, description="Custom APIs belonging to this app")
    mobile_navigation: MobileNavigation | None = Field(default=None, description="Mobile navigation configuration")
    aria: AriaProps | None = Field(default=None, description="ARIA accessibility attributes")
