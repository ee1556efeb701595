import numpy as np
import pytest

from conftest import make_gradient
from models import ExportFormat, FilterParameters
from pixel_art import DecodeError, EditorSession, EncodeError, ImageProcessor, run
from pixel_art.session import format_for_path


@pytest.fixture
def session():
    return EditorSession(processor=ImageProcessor(rng=21))


def test_empty_session_is_a_no_op(session, tmp_path):
    assert not session.has_image
    assert session.processed is None
    assert session.export_png() is None
    assert session.export_svg() is None
    assert session.save(tmp_path / "out.png") is None
    assert list(tmp_path.iterdir()) == []

    state = session.set_pixel_size(12)
    assert state.processed is None
    assert state.parameters.pixel_size == 12


def test_load_processes_with_current_parameters(session, png_file):
    state = session.load(png_file)
    assert state.has_image
    assert state.version == 1
    assert state.processed == run(FilterParameters(), make_gradient(40, 30))


def test_every_change_creates_a_new_version(session, png_file):
    first = session.load(png_file)
    second = session.set_pixel_size(1)
    third = session.set_noise_level(0)

    assert [first.version, second.version, third.version] == [1, 2, 3]
    # Earlier snapshots stay as they were
    assert first.parameters.pixel_size == 8
    assert third.processed == make_gradient(40, 30)


def test_parameters_are_clamped(session):
    session.set_pixel_size(999)
    session.set_noise_level(-1)
    assert session.parameters == FilterParameters(pixel_size=50, noise_level=0)


def test_reset_restores_defaults(session, png_file):
    session.load(png_file)
    session.set_parameters(FilterParameters(pixel_size=3, noise_level=70))
    state = session.reset()
    assert state.parameters == FilterParameters(pixel_size=8, noise_level=0)
    assert state.processed == run(FilterParameters(), make_gradient(40, 30))


def test_failed_load_leaves_no_image(session, png_file):
    session.load(png_file)
    with pytest.raises(DecodeError):
        session.load(b"garbage")
    assert not session.has_image
    assert session.export_png() is None


def test_reroll_draws_fresh_noise(session, png_file):
    session.load(png_file)
    before = session.set_noise_level(60).processed
    after = session.reroll().processed
    assert before != after
    assert np.array_equal(before.pixels[..., 3], after.pixels[..., 3])


def test_save_infers_format_from_suffix(session, png_file, tmp_path):
    session.load(png_file)
    svg_path = session.save(tmp_path / "art.svg")
    png_path = session.save(tmp_path / "art.png")
    assert svg_path.read_text(encoding="utf-8").startswith("<?xml")
    assert png_path.read_bytes() == session.export_png()


def test_save_defaults_to_suggested_filename(session, png_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session.load(png_file)
    assert session.save(fmt=ExportFormat.SVG).name == "pixel-art.svg"
    assert session.save().name == "pixel-art.png"


def test_failed_export_keeps_state(session, png_file, tmp_path):
    session.load(png_file)
    state = session.state
    with pytest.raises(EncodeError):
        session.save(tmp_path / "missing-dir" / "out.png")
    assert session.state is state
    assert session.export_png() is not None


@pytest.mark.parametrize(
    "path, expected",
    [
        (None, ExportFormat.PNG),
        ("x.png", ExportFormat.PNG),
        ("x.SVG", ExportFormat.SVG),
        ("x.jpeg", ExportFormat.PNG),
    ],
)
def test_format_for_path(path, expected):
    assert format_for_path(path) is expected
