from pydantic import BaseModel


class NotFoundPage(BaseModel):
    title: str = "Page not found"
    message: str = "The page you are looking for doesn't exist or has been moved."
    home_path: str = "/"


class HealthResponse(BaseModel):
    status: str = "ok"
    backend: str
