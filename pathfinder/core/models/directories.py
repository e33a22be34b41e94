from enum import Enum, IntFlag


class DirectoryKind(str, Enum):
    """Well-known directories the host can resolve"""
    APPLICATIONS = "applications"
    DEMO_APPLICATIONS = "demo_applications"
    DEVELOPER_APPLICATIONS = "developer_applications"
    ADMIN_APPLICATIONS = "admin_applications"
    LIBRARY = "library"
    DEVELOPER = "developer"
    USERS = "users"
    DOCUMENTATION = "documentation"
    DOCUMENTS = "documents"
    CORE_SERVICES = "core_services"
    AUTOSAVED_INFORMATION = "autosaved_information"
    DESKTOP = "desktop"
    CACHES = "caches"
    APPLICATION_SUPPORT = "application_support"
    DOWNLOADS = "downloads"
    INPUT_METHODS = "input_methods"
    MOVIES = "movies"
    MUSIC = "music"
    PICTURES = "pictures"
    PRINTER_DESCRIPTIONS = "printer_descriptions"
    SHARED_PUBLIC = "shared_public"
    PREFERENCE_PANES = "preference_panes"
    APPLICATION_SCRIPTS = "application_scripts"
    ITEM_REPLACEMENT = "item_replacement"
    ALL_APPLICATIONS = "all_applications"
    ALL_LIBRARIES = "all_libraries"
    TRASH = "trash"


class DomainMask(IntFlag):
    """Scopes searched for a directory kind; ALL searches user first"""
    USER = 1
    LOCAL = 2
    NETWORK = 4
    SYSTEM = 8
    ALL = USER | LOCAL | NETWORK | SYSTEM
