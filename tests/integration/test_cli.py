"""Integration tests for the stroke-segmenter command."""

import io
import json

import pytest
from PIL import Image

from stroke_segmenter.cli import EXIT_FAILURE, EXIT_OK, main

pytestmark = pytest.mark.integration


def _stdout_json(capsys):
    return json.loads(capsys.readouterr().out)


def test_prints_result_json(input_file, capsys):
    assert main([str(input_file)]) == EXIT_OK
    result = _stdout_json(capsys)
    assert len(result['characters']) == 2
    assert [s['character_index'] for s in result['strokes']] == [0, 0, 0, 1, 1, 1]
    assert result['segmentation_svg'].startswith('<svg')


def test_writes_overlays(input_file, tmp_path, capsys):
    out_dir = tmp_path / 'out'
    assert main([str(input_file), '--output', str(out_dir)]) == EXIT_OK

    assert (out_dir / 'segmentation.svg').read_text().count('<line') == 1
    assert (out_dir / 'lassos.svg').read_text().startswith('<svg')
    written = json.loads((out_dir / 'result.json').read_text())
    assert written == _stdout_json(capsys)


def test_writes_png_preview(input_file, tmp_path, capsys):
    png = tmp_path / 'preview.png'
    assert main([str(input_file), '--png', str(png), '--scale', '0.5']) == EXIT_OK
    with Image.open(png) as img:
        assert img.size == (400, 300)


def test_reads_stdin(payload, monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO(json.dumps(payload)))
    assert main(['-']) == EXIT_OK
    assert len(_stdout_json(capsys)['characters']) == 2


def test_config_file(input_file, tmp_path, capsys):
    config = tmp_path / 'config.json'
    config.write_text(json.dumps({'minRowGapRatio': 5.0}))
    assert main([str(input_file), '-c', str(config)]) == EXIT_OK
    assert len(_stdout_json(capsys)['characters']) == 1


def test_compact_output(input_file, capsys):
    assert main([str(input_file), '--indent', '0']) == EXIT_OK
    assert json.loads(capsys.readouterr().out)['grid']['columns'] == 1


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.json')]) == EXIT_FAILURE
    assert capsys.readouterr().out == ''


def test_malformed_json(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"strokes": [')
    assert main([str(path)]) == EXIT_FAILURE


def test_invalid_input(payload, tmp_path):
    payload['canvasWidth'] = -1
    path = tmp_path / 'input.json'
    path.write_text(json.dumps(payload))
    assert main([str(path)]) == EXIT_FAILURE


def test_invalid_config(input_file, tmp_path):
    config = tmp_path / 'config.json'
    config.write_text(json.dumps({'bogus': 1}))
    assert main([str(input_file), '--config', str(config)]) == EXIT_FAILURE
