"""Tests for the role guards in app.api.deps."""

import pytest

from app.api.deps import require_admin, require_agent, require_distributor
from app.errors import ForbiddenError
from app.models.user import Principal, Role

ADMIN = Principal(user_id="u-admin", role=Role.ADMIN)
AGENT = Principal(user_id="u-agent", role=Role.AGENT)


def test_require_distributor_allows_admin():
    assert require_distributor(ADMIN) is ADMIN


def test_require_distributor_rejects_agent():
    with pytest.raises(ForbiddenError, match="distribute"):
        require_distributor(AGENT)


def test_require_admin_rejects_agent():
    with pytest.raises(ForbiddenError):
        require_admin(AGENT)


def test_require_agent_rejects_admin():
    with pytest.raises(ForbiddenError, match="Only agents"):
        require_agent(ADMIN)
