from learnquest.config.settings import Settings, settings
from learnquest.config.feature_flags import FeatureFlags, feature_flags

__all__ = ["Settings", "settings", "FeatureFlags", "feature_flags"]
