import logging

import pytest

from grouse.grouse_diagnostics import Diagnostics


@pytest.fixture  # type: ignore[misc]
def diagnostics() -> Diagnostics:
    return Diagnostics(logging.getLogger("compiler.Parser.test"))
