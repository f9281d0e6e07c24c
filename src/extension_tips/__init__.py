"""
extension-tips - file-based extension recommendations

Recommends editor extensions for the documents a user opens and for the
current workspace, without re-prompting for dismissed or installed ones.
"""

__version__ = "0.1.0"

# Re-export the main entry points for convenience
from extension_tips.core.config.models import TipsConfig
from extension_tips.core.tips.service import ExtensionTipsService

__all__ = ["ExtensionTipsService", "TipsConfig", "__version__"]
