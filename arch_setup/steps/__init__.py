from .base import ManifestStep, MarkerStep, PathStep, StepState, ToolStep
from .step_10_check_deps import CheckDependenciesStep
from .step_15_check_connection import CheckConnectionStep
from .step_20_install_aur_helper import InstallAurHelperStep
from .step_30_configure_repository import ConfigureRepositoryStep
from .step_40_install_packages import InstallPackagesStep
from .step_50_deploy_dotfiles import DeployDotfilesStep
from .step_55_clone_wallpapers import CloneWallpapersStep
from .step_60_setup_nix import SetupNixStep
from .step_70_init_home_manager import InitHomeManagerStep
from .step_80_apply_home_config import ApplyHomeConfigStep

__all__ = [
    "StepState",
    "ManifestStep",
    "MarkerStep",
    "PathStep",
    "ToolStep",
    "CheckDependenciesStep",
    "CheckConnectionStep",
    "InstallAurHelperStep",
    "ConfigureRepositoryStep",
    "InstallPackagesStep",
    "DeployDotfilesStep",
    "CloneWallpapersStep",
    "SetupNixStep",
    "InitHomeManagerStep",
    "ApplyHomeConfigStep",
]
