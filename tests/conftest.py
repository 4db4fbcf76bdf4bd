# Minimal conftest providing a fallback 'qtbot' fixture if pytest-qt is not installed.
# Widget tests still create/destroy widgets; if pytest-qt is installed its fixture wins.

import os
import sys
import contextlib

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot():  # type: ignore
        QtWidgets = pytest.importorskip("PyQt6.QtWidgets")
        app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        yield Bot()
        for w in widgets:
            w.close()
        app.processEvents()


@pytest.fixture(autouse=True)
def _reset_reduced_motion():
    from balancechart.design import reduced_motion

    prev = reduced_motion.is_reduced_motion()
    reduced_motion.set_reduced_motion(False)
    yield
    reduced_motion.set_reduced_motion(prev)
