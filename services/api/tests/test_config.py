import pytest
from booklend.core.config import OverlapPolicy, Settings
from pydantic import ValidationError


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('["http://a.test", "http://b.test"]', ["http://a.test", "http://b.test"]),
        ("[http://a.test, http://b.test]", ["http://a.test", "http://b.test"]),
        ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
        ("*", ["*"]),
        ("", []),
    ],
)
def test_cors_origins_formats(raw, expected):
    assert Settings(CORS_ORIGINS=raw).cors_origins == expected


def test_overlap_policy_from_env(monkeypatch):
    monkeypatch.setenv("BORROW_OVERLAP_POLICY", " Intersection ")
    assert Settings().borrow_overlap_policy is OverlapPolicy.intersection


def test_overlap_policy_defaults_to_endpoints(monkeypatch):
    monkeypatch.delenv("BORROW_OVERLAP_POLICY", raising=False)
    s = Settings()
    assert s.borrow_overlap_policy is OverlapPolicy.endpoints
    assert s.approval_conflict_check is False


def test_unknown_overlap_policy_is_rejected():
    with pytest.raises(ValidationError):
        Settings(BORROW_OVERLAP_POLICY="fuzzy")
