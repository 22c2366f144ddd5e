from __future__ import annotations

import restcore


def test_version() -> None:
    assert isinstance(restcore.__version__, str)


def test_all_exports_exist() -> None:
    for name in restcore.__all__:
        assert hasattr(restcore, name)
