import json
from pathlib import Path

import pytest

from metadata_engine.errors import DocumentReadError, DocumentWriteError
from metadata_engine.models import MetadataDocument
from metadata_engine.store import (
    MAX_KEYWORDS,
    build_description,
    dedupe_keywords,
    load_metadata,
    merge_keywords,
    save_metadata,
)

SEO_DOC = {
    "title": "TNT LINE Bot",
    "description": "old description",
    "keywords": ["B", "D"],
    "url": "https://example.com",
    "image": "/og-image.png",
}


def _write_doc(path: Path, doc: dict) -> Path:
    path.write_text(json.dumps(doc, ensure_ascii=False), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# merge_keywords
# ---------------------------------------------------------------------------


def test_merge_puts_trends_first_and_dedupes() -> None:
    merged = merge_keywords(MetadataDocument(keywords=["B", "D"]), ["A", "B", "C"])
    assert merged.keywords == ["A", "B", "C", "D"]


def test_merge_caps_at_thirty() -> None:
    trends = [f"trend-{i}" for i in range(40)]
    merged = merge_keywords(MetadataDocument(keywords=["old"]), trends)
    assert len(merged.keywords) == MAX_KEYWORDS
    assert merged.keywords == trends[:30]


@pytest.mark.parametrize(
    "trends, stored",
    [
        ([], []),
        (["A", "A", "A"], ["A"]),
        (["x"] * 50, [f"k{i}" for i in range(50)]),
        ([f"t{i}" for i in range(20)], [f"t{i}" for i in range(10, 40)]),
        (["Case", "case"], ["CASE"]),
    ],
)
def test_merge_result_is_unique_and_bounded(trends, stored) -> None:
    keywords = merge_keywords(MetadataDocument(keywords=stored), trends).keywords
    assert len(keywords) <= MAX_KEYWORDS
    assert len(keywords) == len(set(keywords))


def test_merge_trend_priority_preserves_order() -> None:
    trends = ["C", "A", "C", "B"]
    merged = merge_keywords(MetadataDocument(keywords=["A", "Z"]), trends)
    assert merged.keywords[:3] == ["C", "A", "B"]
    assert merged.keywords == ["C", "A", "B", "Z"]


def test_merge_with_no_trends_keeps_valid_keywords() -> None:
    doc = MetadataDocument(keywords=["A", "B"], description="x")
    merged = merge_keywords(doc, [])
    assert merged.keywords == ["A", "B"]
    assert merged.description == build_description([])


def test_merge_with_missing_keywords_field(tmp_path: Path) -> None:
    doc = load_metadata(_write_doc(tmp_path / "seo.json", {"title": "t"}))
    merged = merge_keywords(doc, ["A"])
    assert merged.keywords == ["A"]


def test_merge_does_not_mutate_input_and_keeps_extras() -> None:
    doc = MetadataDocument.model_validate(SEO_DOC)
    merged = merge_keywords(doc, ["A"])

    assert doc.keywords == ["B", "D"]
    assert doc.description == "old description"
    dumped = merged.to_json_dict()
    for key in ("title", "url", "image"):
        assert dumped[key] == SEO_DOC[key]


def test_description_uses_first_six_trends_only() -> None:
    trends = ["一", "二", "三", "四", "五", "六", "七"]
    merged = merge_keywords(MetadataDocument(keywords=["舊"]), trends)
    assert merged.description == "最新熱門搜尋：一、二、三、四、五、六... 獨家技術｜AI學習演算法｜多種判定引擎"


def test_description_with_few_trends() -> None:
    assert build_description(["A", "B"]) == "最新熱門搜尋：A、B... 獨家技術｜AI學習演算法｜多種判定引擎"


def test_dedupe_keywords_is_stable() -> None:
    assert dedupe_keywords(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


# ---------------------------------------------------------------------------
# load_metadata / save_metadata
# ---------------------------------------------------------------------------


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError):
        load_metadata(tmp_path / "seo.json")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"keywords": "A, B"}),
        json.dumps({"keywords": [1, 2]}),
    ],
)
def test_load_rejects_invalid_documents(tmp_path: Path, content: str) -> None:
    path = tmp_path / "seo.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(DocumentReadError):
        load_metadata(path)


@pytest.mark.parametrize(
    "content, keywords, description",
    [
        ({"title": "t", "keywords": None}, [], ""),
        ({"title": "t", "description": None}, [], ""),
        ({"keywords": ["A"], "description": ["stale"]}, ["A"], ""),
        ({"keywords": ["A"], "description": 3}, ["A"], ""),
    ],
)
def test_load_treats_null_fields_as_empty(tmp_path: Path, content: dict, keywords, description) -> None:
    doc = load_metadata(_write_doc(tmp_path / "seo.json", content))
    assert doc.keywords == keywords
    assert doc.description == description


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    path = _write_doc(tmp_path / "seo.json", {})
    doc = merge_keywords(MetadataDocument.model_validate(SEO_DOC), ["颱風", "A"])

    save_metadata(doc, path)

    assert load_metadata(path).to_json_dict() == doc.to_json_dict()
    text = path.read_text(encoding="utf-8")
    assert "颱風" in text  # written as UTF-8, not \u escapes
    assert text.endswith("\n")
    assert not (tmp_path / "seo.json.tmp").exists()


def test_save_refuses_to_create_file(tmp_path: Path) -> None:
    path = tmp_path / "seo.json"
    with pytest.raises(DocumentWriteError):
        save_metadata(MetadataDocument(keywords=["A"]), path)
    assert not path.exists()


def test_save_failure_leaves_original_and_cleans_up(tmp_path: Path, monkeypatch) -> None:
    path = _write_doc(tmp_path / "seo.json", SEO_DOC)
    original = path.read_text(encoding="utf-8")

    def broken_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", broken_replace)

    with pytest.raises(DocumentWriteError):
        save_metadata(MetadataDocument(keywords=["A"]), path)

    assert path.read_text(encoding="utf-8") == original
    assert not (tmp_path / "seo.json.tmp").exists()


def test_save_keeps_file_permissions(tmp_path: Path) -> None:
    path = _write_doc(tmp_path / "seo.json", SEO_DOC)
    path.chmod(0o600)

    save_metadata(MetadataDocument(keywords=["A"]), path)

    assert path.stat().st_mode & 0o777 == 0o600
