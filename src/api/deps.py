from ..services.backend_client import BackendClient


def get_backend_client() -> BackendClient:
    """Backend client per request; override in tests with app.dependency_overrides."""
    return BackendClient()
