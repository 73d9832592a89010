from .step_05_check_root import CheckRootStep
from .step_10_detect_distro import DetectDistroStep
from .step_15_check_network import CheckNetworkStep
from .step_20_welcome import WelcomeStep
from .step_30_update_package_db import UpdatePackageDbStep
from .step_40_install_base import InstallBaseStep
from .step_50_install_main import InstallMainStep
from .step_60_install_extras import InstallExtrasStep
from .step_70_link_dotfiles import LinkDotfilesStep
from .step_80_change_shell import ChangeShellStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "CheckRootStep",
    "DetectDistroStep",
    "CheckNetworkStep",
    "WelcomeStep",
    "UpdatePackageDbStep",
    "InstallBaseStep",
    "InstallMainStep",
    "InstallExtrasStep",
    "LinkDotfilesStep",
    "ChangeShellStep",
    "FinalizeStep",
]
