import io
import json
import math

import pytest

from spbench.logger import StdLogger


def test_text_format_and_level_filtering():
    buf = io.StringIO()
    log = StdLogger(level="info", stream=buf)
    log.debug("hidden", a=1)
    log.info("run", n=3, m=2)
    log.warning("slow")
    assert buf.getvalue().splitlines() == ["info run n=3 m=2", "warning slow"]


def test_json_format_replaces_infinity():
    buf = io.StringIO()
    StdLogger(level="debug", json_fmt=True, stream=buf).debug("dist", d=[0, math.inf])
    assert json.loads(buf.getvalue()) == {"level": "debug", "event": "dist", "d": [0, None]}


def test_unknown_level():
    with pytest.raises(ValueError):
        StdLogger(level="trace")
