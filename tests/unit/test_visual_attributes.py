"""Unit tests for per-element visual attributes."""

from dnsprop.models.app_state import HoverState
from dnsprop.models.dns_result import ServerStatus
from dnsprop.services.color_assigner import PALETTE, STATUS_COLORS
from dnsprop.services.consistency_analyzer import analyze_batch
from dnsprop.services.visual_attributes import (
    DIMMED_OPACITY,
    HOVERED_SCALE,
    build_map_markers,
    element_style,
    marker_label,
)


def test_idle_style(split_batch):
    """Test full opacity and normal size when nothing is hovered."""
    stats = analyze_batch(split_batch)

    style = element_style(stats, split_batch.results[0], HoverState())

    assert style.color == PALETTE[0]
    assert style.palette_index == 0
    assert style.opacity == 1.0
    assert style.scale == 1.0
    assert style.pulse_ring is False


def test_hovered_and_dimmed_styles(split_batch):
    """Test the hovered element is enlarged and siblings are dimmed."""
    stats = analyze_batch(split_batch)
    hover = HoverState(hovered_id="8.8.8.8")

    hovered = element_style(stats, split_batch.results[1], hover)
    sibling = element_style(stats, split_batch.results[0], hover)

    assert hovered.scale == HOVERED_SCALE
    assert hovered.pulse_ring is True
    assert hovered.opacity == 1.0
    assert sibling.opacity == DIMMED_OPACITY == 0.4
    assert sibling.scale == 1.0


def test_style_for_failed_result(split_batch):
    """Test a timeout renders with its status color and no palette index."""
    stats = analyze_batch(split_batch)

    style = element_style(stats, split_batch.results[3], HoverState())

    assert style.palette_index is None
    assert style.color == STATUS_COLORS[ServerStatus.TIMEOUT]


def test_explicit_element_id(split_batch):
    """Test rows can use their own element ids."""
    stats = analyze_batch(split_batch)
    hover = HoverState(hovered_id="row-0")

    style = element_style(stats, split_batch.results[0], hover, element_id="row-0")

    assert style.pulse_ring is True


def test_build_map_markers_skips_unplaced(result_factory, batch_factory):
    """Test only results with coordinates become markers."""
    placed = result_factory(
        "1.1.1.1",
        values=["93.184.216.34"],
        region="San Francisco, CA, Cloudflare",
        latitude=37.77,
        longitude=-122.42,
    )
    unplaced = result_factory("203.0.113.53", values=["93.184.216.34"])
    batch = batch_factory(placed, unplaced)
    stats = analyze_batch(batch)

    markers = build_map_markers(batch, stats, HoverState())

    assert [m.element_id for m in markers] == ["1.1.1.1"]
    assert markers[0].latitude == 37.77
    assert markers[0].style.color == PALETTE[0]


def test_marker_and_row_share_color(result_factory, batch_factory):
    """Test a marker uses the same color as the table row of its result."""
    first = result_factory("a", values=["1.1.1.1"], latitude=1.0, longitude=1.0)
    second = result_factory("b", values=["2.2.2.2"], latitude=2.0, longitude=2.0)
    batch = batch_factory(first, second)
    stats = analyze_batch(batch)

    markers = build_map_markers(batch, stats, HoverState())

    for marker, result in zip(markers, batch.results):
        assert marker.style.color == element_style(stats, result, HoverState()).color


def test_marker_label(result_factory):
    """Test tooltip text for answered and failed results."""
    ok = result_factory("1.1.1.1", values=["a", "b"], region="Sydney")
    failed = result_factory("8.8.8.8", status=ServerStatus.TIMEOUT)

    assert marker_label(ok) == "1.1.1.1 (Sydney): a, b"
    assert marker_label(failed) == "8.8.8.8 (Unknown): timeout"
