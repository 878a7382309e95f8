import re

import pytest

from gamecore import chart
from gamecore.chart import AsciiChartRenderer, EmptyInputError, price_bounds


def test_price_bounds_round_outward():
    assert price_bounds([10, 20, 15]) == (10, 20, 10)
    assert price_bounds([101.3, 99.2]) == (95, 105, 10)


def test_price_bounds_flat_series_has_unit_range():
    assert price_bounds([100, 100]) == (100, 100, 1)
    assert price_bounds([102, 102])[2] == 5


def test_empty_input_raises():
    with pytest.raises(EmptyInputError):
        AsciiChartRenderer().render([])


def test_empty_input_error_is_value_error():
    assert issubclass(EmptyInputError, ValueError)


def test_invalid_size_raises(make_samples):
    with pytest.raises(ValueError):
        AsciiChartRenderer().render_lines(make_samples([1]), width=0, height=5)


@pytest.mark.parametrize("width, height", [(50, 20), (10, 5), (1, 1), (7, 2), (3, 30)])
def test_row_count_and_widths(make_samples, width, height):
    lines = AsciiChartRenderer().render_lines(make_samples([100, 104, 97, 110, 101]), width, height)
    assert len(lines) == height + 2
    assert len({len(line) for line in lines[:height]}) == 1
    assert len(lines[0]) == width + 6


def test_render_is_fenced(make_samples):
    text = AsciiChartRenderer(width=10, height=5).render(make_samples([10, 20, 15]))
    assert text.startswith('```\n')
    assert text.endswith('\n```')
    assert len(text.split('\n')) == 5 + 2 + 2


def test_axis_labels(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([10, 20, 15]), width=9, height=9)
    # every 4th row is labelled: rows 0, 4 and 8
    assert lines[0].startswith('  20 ┤')
    assert lines[4].startswith('  15 ┤')
    assert lines[8].startswith('  10 ┤')
    assert lines[1].startswith('     │')
    assert lines[9] == '     └' + '─' * 9


def test_extremes_map_to_top_and_bottom(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([10, 20]), width=2, height=5)
    grid = [line[6:] for line in lines[:5]]
    # column 0 holds the min price (bottom row) connected up to the max price (top row)
    assert [row[0] for row in grid] == [chart.FILLED] * 5
    # the last column only holds its own point
    assert grid[0][1] == chart.FILLED
    assert all(row[1] == chart.EMPTY for row in grid[1:])


def test_shadow_below_connector(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([20, 20, 20, 10]), width=4, height=9)
    grid = [line[6:] for line in lines[:9]]
    # flat at the top for column 0: fill row 0, shadow rows 1 and 2
    assert grid[0][0] == chart.FILLED
    assert grid[1][0] == chart.SHADOW
    assert grid[2][0] == chart.SHADOW
    assert grid[3][0] == chart.EMPTY


def test_shadow_never_past_bottom(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([10, 10, 10]), width=3, height=4)
    grid = [line[6:] for line in lines[:4]]
    assert grid[3] == chart.FILLED * 3
    assert chart.SHADOW not in ''.join(grid)


def test_nearest_neighbour_downsampling(make_samples):
    prices = [10] * 50 + [20] * 50
    lines = AsciiChartRenderer().render_lines(make_samples(prices), width=4, height=5)
    grid = [line[6:] for line in lines[:5]]
    # columns 0 and 1 read from the first half, 2 and 3 from the second
    assert grid[4][0] == chart.FILLED
    assert grid[0][3] == chart.FILLED
    assert grid[0][0] != chart.FILLED


def test_single_row_chart(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([10, 20, 15]), width=5, height=1)
    assert len(lines) == 3
    assert lines[0].startswith('  20 ┤')
    assert lines[0][6:] == chart.FILLED * 5


def test_wide_labels_keep_rows_aligned(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([99990, 100010]), width=6, height=6)
    assert lines[0].startswith('100010 ┤')
    assert len({len(line) for line in lines}) == 1


def test_time_labels(make_samples, monkeypatch):
    monkeypatch.setattr(chart, '_time_label', lambda ts: 'AB:CD')
    lines = AsciiChartRenderer().render_lines(make_samples([1, 2, 3]), width=20, height=4)
    time_row = lines[-1][6:]
    assert len(time_row) == 20
    # labels centred on columns 0, 6, 12 and 19; both ends are clipped
    assert time_row == ':CD AB:CD AB:CD  AB:'


def test_time_label_interpolation(make_samples, monkeypatch):
    seen = []
    monkeypatch.setattr(chart, '_time_label', lambda ts: seen.append(ts) or '00:00')
    samples = make_samples([1, 2, 3, 4], start=0, step_ms=60_000)
    AsciiChartRenderer().render_lines(samples, width=30, height=4)
    assert seen == pytest.approx([0, 60_000, 120_000, 180_000])


def test_real_time_label_format(make_samples):
    lines = AsciiChartRenderer().render_lines(make_samples([1, 2]), width=50, height=4)
    assert len(re.findall(r'\d\d:\d\d', lines[-1])) == 2
