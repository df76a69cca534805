from portal.backend.client import Backend, BackendClient
from portal.backend.memory import create_sample_backend
from portal.core.config import settings


def create_backend() -> Backend:
    # production settings refuse to load without URL/key, so the sample backend is development-only
    if settings.backend_configured:
        return BackendClient(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.backend_timeout_seconds,
        )
    return create_sample_backend()


backend = create_backend()


async def get_backend() -> Backend:
    return backend


async def close_backend() -> None:
    await backend.aclose()
