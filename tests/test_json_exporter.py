import json

import pytest

from adapters.json_exporter import export_json, render_json
from core.domain.errors import JsonError


def test_render_keeps_key_order_and_unicode():
    rendered = render_json({"z": 1, "a": "Zürich"})
    assert rendered == '{\n  "z": 1,\n  "a": "Zürich"\n}'


def test_unserializable_document_is_a_json_error():
    with pytest.raises(JsonError):
        render_json({"data": object()})


def test_export_creates_parent_dirs(tmp_path):
    path = export_json(document={"data": [1, 2, 3]}, output_path=tmp_path / "a" / "b.json")
    assert path.read_text(encoding="utf-8").endswith("}\n")
    assert json.loads(path.read_text(encoding="utf-8")) == {"data": [1, 2, 3]}
