"""
Mock user service providing subject creation and credential checks.
"""

from typing import Dict
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.logging import get_logger


class CreateUserRequest(BaseModel):
    user_id: str
    password: str
    email: str = ""


class VerifyRequest(BaseModel):
    user_id: str
    password: str


class MockUserService:
    """Mock user service implementation."""

    def __init__(self, port: int = 8090):
        self.port = port
        self.logger = get_logger("mock.user_service")
        self.app = FastAPI(title="Mock User Service", version="1.0.0")

        # Passwords kept in plain text
        self.users: Dict[str, Dict[str, str]] = {}
        self.available = True

        self._setup_routes()

    def _unavailable(self) -> JSONResponse:
        return JSONResponse(status_code=503, content={"error": "unavailable"})

    def _setup_routes(self):
        """Set up mock user service routes."""

        @self.app.get("/health")
        async def health():
            if not self.available:
                return self._unavailable()
            return {"status": "ok"}

        @self.app.post("/users", status_code=201)
        async def create_user(request: CreateUserRequest):
            if not self.available:
                return self._unavailable()
            if request.user_id in self.users:
                return JSONResponse(status_code=409, content={"error": "exists"})

            self.users[request.user_id] = {"password": request.password, "email": request.email}
            self.logger.info("Mock user created", user_id=request.user_id)
            return {"user_id": request.user_id}

        @self.app.post("/users/verify")
        async def verify(request: VerifyRequest):
            if not self.available:
                return self._unavailable()
            user = self.users.get(request.user_id)
            if user is None or user["password"] != request.password:
                return JSONResponse(status_code=401, content={"error": "unauthorized"})
            return {"user_id": request.user_id}


def create_app():
    """Create mock user service application."""
    server = MockUserService()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
