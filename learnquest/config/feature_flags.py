"""
Feature Flags Configuration

Centralized feature flag management for the dashboard backend.
All feature flags are loaded from environment variables.
"""
import os


def get_bool_env(key: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ('true', '1', 'yes', 'on', 'enabled')


class FeatureFlags:
    """
    Feature flags for the application.

    To add a new feature flag:
    1. Add it here as a class property
    2. Load it from environment variable
    3. Use it in your code
    """

    # Rescan COURSE_PATH when the app starts
    FEATURE_SCAN_ON_STARTUP: bool = get_bool_env('FEATURE_SCAN_ON_STARTUP', True)

    # Serve the bundled single-page dashboard at "/"
    FEATURE_SERVE_DASHBOARD: bool = get_bool_env('FEATURE_SERVE_DASHBOARD', True)

    # Reject video requests without a Range header (416) instead of sending the whole file
    FEATURE_STRICT_RANGE: bool = get_bool_env('FEATURE_STRICT_RANGE', False)

    @classmethod
    def get_all_flags(cls) -> dict:
        """Get all feature flags as a dictionary."""
        return {
            key: value
            for key, value in cls.__dict__.items()
            if not key.startswith('_') and isinstance(value, bool)
        }


# Singleton instance for easy importing
feature_flags = FeatureFlags()
