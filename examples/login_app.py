"""Minimal Starlette app protected by the pythia strategy.

Usage (from the project root):
    python examples/login_app.py

Then test with curl:
    curl http://localhost:8000/health                                    # 200 (exempt)
    curl -X POST http://localhost:8000/login                             # 400 (missing credentials)
    curl -X POST -d 'username=alice&password=wrong' localhost:8000/login # 401
    curl -X POST -d 'username=alice&password=secret' localhost:8000/login # 200
"""

import hmac
import logging
from dataclasses import dataclass

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from pythia_auth import PythiaStrategy
from pythia_auth.middleware import StrategyMiddleware, auth_identity_var


@dataclass(frozen=True)
class Account:
    username: str
    password: str

    def compare_secret(self, candidate: str) -> bool:
        return hmac.compare_digest(candidate.encode(), self.password.encode())


ACCOUNTS = {"alice": Account("alice", "secret")}


async def find_account(username: str) -> Account | None:
    return ACCOUNTS.get(username)


async def login(request):
    account = auth_identity_var.get()
    return JSONResponse({"username": account.username})


async def health(request):
    return JSONResponse({"status": "ok"})


app = Starlette(
    routes=[Route("/login", login, methods=["POST"]), Route("/health", health)],
    middleware=[Middleware(StrategyMiddleware, strategy=PythiaStrategy(find_account), mask_failures=True)],
)

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    uvicorn.run(app, host="127.0.0.1", port=8000)
