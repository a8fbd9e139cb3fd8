"""Integration test fixtures.

Provides a FastAPI application whose routes are bound to a class-based
resource. The resource plays the validation engine: it raises
ConstraintViolationError with violations shaped like real ones.
"""

from collections.abc import Generator
from typing import Annotated

import pytest
from fastapi import APIRouter, FastAPI, Path, Query
from fastapi.testclient import TestClient

from constraint_messages.application.exceptions import ConstraintViolationError
from constraint_messages.domain.entities.violation import PathNode
from constraint_messages.main import lifespan, register_exception_handlers
from constraint_messages.presentation.dependencies import reset_singletons
from tests.fakes.resources import PageParams
from tests.fakes.violations import POSITIVE, violation


class AccountResource:
    """Resource whose handlers report constraint violations."""

    def create_account(self, name: Annotated[str, Query(alias="name")] = "") -> dict:
        if not name.strip():
            raise ConstraintViolationError(
                [
                    violation(
                        PathNode.method("create_account", str),
                        PathNode.parameter("arg0", 0),
                        message="must not be blank",
                        leaf_bean_type=AccountResource,
                    )
                ]
            )
        return {"name": self.normalize(name)}

    def get_account(self, account_id: Annotated[int, Path()]) -> dict:
        raise ConstraintViolationError(
            [
                violation(
                    PathNode.method("get_account", int),
                    PathNode.return_value(),
                    PathNode.property("age"),
                    message="must be positive",
                    descriptor=POSITIVE,
                    leaf_bean_type=AccountResource,
                )
            ]
        )

    def rename_account(self, name: Annotated[str, Query()] = "") -> dict:
        # Fails inside a helper that is not a bound handler
        raise ConstraintViolationError(
            [
                violation(
                    PathNode.method("normalize", str),
                    PathNode.parameter("arg0", 0),
                    message="must not be blank",
                    leaf_bean_type=AccountResource,
                )
            ]
        )

    def search_accounts(self) -> dict:
        raise ConstraintViolationError(
            [
                violation(
                    PathNode.method("search_accounts", PageParams),
                    PathNode.parameter("params", 0),
                    PathNode.property("size"),
                    leaf_bean_type=PageParams,
                )
            ]
        )

    def import_accounts(self) -> dict:
        raise ConstraintViolationError(message="bad request")

    def normalize(self, name: str) -> str:
        return name.strip()


@pytest.fixture
def resource_app() -> FastAPI:
    """Create an application with AccountResource bound to /accounts."""
    resource = AccountResource()
    router = APIRouter(prefix="/accounts")
    router.add_api_route("", resource.create_account, methods=["POST"])
    router.add_api_route("/{account_id}", resource.get_account, methods=["GET"])
    router.add_api_route("/rename", resource.rename_account, methods=["PUT"])
    router.add_api_route("/search", resource.search_accounts, methods=["POST"])
    router.add_api_route("/import", resource.import_accounts, methods=["POST"])

    app = FastAPI(lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(router)
    return app


@pytest.fixture
def client(resource_app: FastAPI) -> Generator[TestClient]:
    """
    Create a test client; entering it runs the lifespan, which binds routes.

    Registry and message cache singletons are reset around each test.
    """
    reset_singletons()
    with TestClient(resource_app, raise_server_exceptions=False) as test_client:
        yield test_client
    reset_singletons()
