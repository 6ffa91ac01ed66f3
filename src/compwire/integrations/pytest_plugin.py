from __future__ import annotations

import pytest

from compwire.container import Container


@pytest.fixture()
def compwire_container() -> Container:
    """Create a per-test, unwired container.

    The fixture is function-scoped, so components wired in one test never leak
    into another. Override it in a ``conftest.py`` to share a pre-wired
    container, for example with ``scope="session"``.

    Returns:
        A new ``Container`` instance.

    """
    return Container()
