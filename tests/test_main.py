""" Command line tests. """

import pytest
from PyQt6.QtGui import QImage

from vector_ink.layers.layer_manager import LayerManager
from vector_ink.main import main, parse_size
from vector_ink.services.canvas_storage import CanvasStorage
from vector_ink.utils.logging_config import LoggingConfig


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    LoggingConfig.shutdown()


def test_parse_size() -> None:
    assert parse_size("800x600") == (800, 600)
    assert parse_size("10X20") == (10, 20)


def test_renders_stored_canvas(tmp_path) -> None:
    storage = CanvasStorage(tmp_path / "canvases")
    manager = LayerManager()
    manager.create_drawing_layer()
    storage.save_canvas("page", manager, (30, 20))

    out = tmp_path / "page.png"
    assert main(["page", str(out), "--storage", str(tmp_path / "canvases")]) == 0
    assert QImage(str(out)).size().width() == 30
    assert LoggingConfig.get_log_file_path().exists()

    sized = tmp_path / "sized.png"
    assert main(["page", str(sized), "--storage", str(tmp_path / "canvases"), "--size", "12x8"]) == 0
    assert QImage(str(sized)).size().height() == 8


def test_missing_canvas_fails(tmp_path) -> None:
    assert main(["nope", str(tmp_path / "x.png"), "--storage", str(tmp_path)]) == 1


def test_list(tmp_path, capsys) -> None:
    storage = CanvasStorage(tmp_path)
    storage.save_canvas("one", LayerManager())
    assert main(["--list", "--storage", str(tmp_path)]) == 0
    assert "one" in capsys.readouterr().out.splitlines()


def test_bad_arguments_exit() -> None:
    with pytest.raises(SystemExit):
        main(["--size", "big"])
    with pytest.raises(SystemExit):
        main([])
