from __future__ import annotations

import logging
import shutil
from pathlib import Path

import orjson
import pytest

from config.settings import TwClassnameConfig
from diagnostics.models import DiagnosticCode
from diagnostics.sink import CollectingSink
from host.pipeline import should_transform, transform_file, transform_tree

FIXTURE_APP = Path(__file__).parent / "fixtures" / "mini_app"


def _copy_fixture(root: Path) -> None:
    shutil.copytree(FIXTURE_APP, root)


@pytest.mark.parametrize(
    ("code", "target", "expected"),
    [
        ('tw("a")', "tw", True),
        ("const tw = 1;", "tw", False),
        ('cx ("a")', "cx", False),
        ('cx("a")', "cx", True),
    ],
)
def test_should_transform(code: str, target: str, expected: bool) -> None:
    assert should_transform(code, target) is expected


def test_transform_file_skips_text_without_target(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "util.ts"
    path.write_text("export const x = 1;\n", encoding="utf-8")

    def _fail(*args: object, **kwargs: object) -> None:
        raise AssertionError("engine must not run")

    monkeypatch.setattr("host.pipeline.transform_code", _fail)

    sink = CollectingSink()
    assert transform_file(path, tmp_path, TwClassnameConfig(), sink) is None
    assert sink.diagnostics == []


def test_transform_file_uses_relative_source_id(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    path = tmp_path / "src" / "view.tsx"
    path.write_text("const c = tw(dynamic);\n", encoding="utf-8")

    sink = CollectingSink()
    result = transform_file(path, tmp_path, TwClassnameConfig(), sink)

    assert result is None
    assert [d.source_id for d in sink.diagnostics] == ["src/view.tsx"]


def test_transform_tree_writes_code_and_maps(tmp_path: Path) -> None:
    root = tmp_path / "app"
    _copy_fixture(root)
    out_dir = tmp_path / "out"

    summary = transform_tree(root=root, out_dir=out_dir, config=TwClassnameConfig())

    assert summary.ok
    assert summary.scanned == 3
    assert summary.transformed == ["src/App.tsx", "src/components/Card.jsx"]
    assert summary.unchanged == 1
    assert [d.code for d in summary.diagnostics] == [
        DiagnosticCode.INVALID_BASE_CLASSES
    ]

    app_code = (out_dir / "src" / "App.tsx").read_text(encoding="utf-8")
    assert 'className={"flex flex-col md:flex-row md:gap-4 lg:gap-8"}' in app_code
    assert 'className={"text-base md:text-lg"}' in app_code
    assert app_code.endswith("//# sourceMappingURL=App.tsx.map\n")

    card_code = (out_dir / "src" / "components" / "Card.jsx").read_text(
        encoding="utf-8"
    )
    assert 'tw(size, { md: "p-8" })' in card_code
    assert 'export const badge = "rounded bg-blue-500 text-white";' in card_code

    source_map = orjson.loads((out_dir / "src" / "App.tsx.map").read_bytes())
    assert source_map["version"] == 3
    assert source_map["file"] == "App.tsx"
    assert source_map["sources"] == ["src/App.tsx"]
    assert source_map["sourcesContent"] == [
        (root / "src" / "App.tsx").read_text(encoding="utf-8")
    ]

    assert not (out_dir / "node_modules").exists()
    assert not (out_dir / "src" / "util.ts").exists()


def test_transform_tree_without_write_only_collects(tmp_path: Path) -> None:
    root = tmp_path / "app"
    _copy_fixture(root)

    summary = transform_tree(root=root, config=TwClassnameConfig(), write=False)

    assert summary.transformed == ["src/App.tsx", "src/components/Card.jsx"]
    assert summary.outputs == []
    assert not (root / ".twclassname").exists()


def test_transform_tree_reports_parse_failures(tmp_path: Path) -> None:
    root = tmp_path / "app"
    _copy_fixture(root)
    (root / "src" / "broken.ts").write_text('const = tw("a");\n', encoding="utf-8")

    summary = transform_tree(root=root, out_dir=tmp_path / "out")

    assert not summary.ok
    assert summary.failed == ["src/broken.ts"]
    assert not (tmp_path / "out" / "src" / "broken.ts").exists()


def test_transform_tree_logs_processed_files(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    root = tmp_path / "app"
    _copy_fixture(root)

    with caplog.at_level(logging.DEBUG, logger="host.pipeline"):
        transform_tree(root=root, out_dir=tmp_path / "out")

    messages = [record.getMessage() for record in caplog.records]
    assert "Processing: src/App.tsx" in messages
    assert "Successfully transformed: src/App.tsx" in messages
    assert "Processing: src/util.ts" not in messages


def test_transform_tree_reports_undecodable_files_and_continues(
    tmp_path: Path,
) -> None:
    root = tmp_path / "app"
    root.mkdir()
    (root / "a.js").write_bytes(b'const s = "caf\xe9"; tw("p-2");\n')
    (root / "b.js").write_bytes(b'tw("m-1");\n')

    summary = transform_tree(root=root, out_dir=tmp_path / "out")

    assert not summary.ok
    assert summary.failed == ["a.js"]
    assert summary.transformed == ["b.js"]
    assert [(d.code, d.source_id, d.is_fatal) for d in summary.diagnostics] == [
        (DiagnosticCode.DECODE_ERROR, "a.js", True)
    ]
    assert (tmp_path / "out" / "b.js").read_text(encoding="utf-8").startswith(
        '"m-1";\n'
    )
    assert not (tmp_path / "out" / "a.js").exists()


def test_transform_tree_skips_nested_output_dir(tmp_path: Path) -> None:
    root = tmp_path / "app"
    _copy_fixture(root)
    out_dir = root / "dist" / "tw"

    transform_tree(root=root, out_dir=out_dir, config=TwClassnameConfig())
    summary = transform_tree(root=root, out_dir=out_dir, config=TwClassnameConfig())

    assert (out_dir / "src" / "App.tsx").is_file()
    assert summary.scanned == 3
    assert summary.transformed == ["src/App.tsx", "src/components/Card.jsx"]
    assert len(summary.diagnostics) == 1
