"""Animation designs: metadata, discovery, frame assets and provisioning."""

from .assets import FrameAssetResolver
from .catalog import DesignCatalog
from .design import AnimationDesign, design_from_manifest
from .placeholder import PlaceholderRenderer
from .provisioner import DesignProvisioner, ProvisioningError

__all__ = [
    "AnimationDesign",
    "design_from_manifest",
    "DesignCatalog",
    "FrameAssetResolver",
    "PlaceholderRenderer",
    "DesignProvisioner",
    "ProvisioningError",
]
