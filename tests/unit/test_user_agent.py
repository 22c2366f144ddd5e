from __future__ import annotations

import platform

from restcore.user_agent import user_agent

################################
#     Tests for user_agent     #
################################


def test_user_agent_default() -> None:
    value = user_agent()
    assert value.startswith("restcore-python/")
    assert value.endswith(f" python/{platform.python_version()}")


def test_user_agent_with_application() -> None:
    assert user_agent("demo", "1.2.0").endswith(" demo/1.2.0")


def test_user_agent_requires_name_and_version() -> None:
    assert user_agent("demo", None) == user_agent()
