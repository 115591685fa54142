"""Verify all modules can be imported without errors."""


def test_core_module_imports():
    """Import core modules to catch bad import paths."""
    import workout_logger_api.main
    import workout_logger_api.models
    import workout_logger_api.config
    import workout_logger_api.auth


def test_api_imports():
    """Import API route modules."""
    import workout_logger_api.api.routes


def test_service_imports():
    """Import service modules."""
    import workout_logger_api.services.notion_service
    import workout_logger_api.services.workout_log_service
    import workout_logger_api.services.workout_normalizer
