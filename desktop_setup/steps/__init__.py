from .apt import AptInstallStep, AptUpgradeStep
from .config_sync import ConfigMapping, ConfigSyncError, ConfigSyncStep
from .deb_package import DebPackageStep
from .flatpak import FlatpakInstallStep, FlatpakRemoteStep
from .installer_script import InstallerScriptStep
from .snap import SnapAppsStep
from .system_services import EnableServiceStep, UserGroupsStep

__all__ = [
    "AptUpgradeStep",
    "AptInstallStep",
    "FlatpakRemoteStep",
    "FlatpakInstallStep",
    "EnableServiceStep",
    "UserGroupsStep",
    "DebPackageStep",
    "InstallerScriptStep",
    "SnapAppsStep",
    "ConfigMapping",
    "ConfigSyncStep",
    "ConfigSyncError",
]
