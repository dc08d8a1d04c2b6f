"""
Application wiring, configuration, rule overrides and logging helpers.
"""

import json
import logging
from importlib import import_module
from pathlib import Path
from typing import Tuple

import sys

import pytest
from pydantic import BaseModel

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.compatibility import CompatibilityEvaluator
from logic.validation import FeedbackRequest
from models.compatibility_rules import DEFAULT_RULES, load_compatibility_rules
from models.garment import Garment
from tools.observability import instrument_tool
from wardrobe_app.app import WardrobeApp
from wardrobe_app.config import AppConfig
from wardrobe_app.logging_config import JsonFormatter, correlation_context, log_event, redact_for_log

_CONFIG_ENV_KEYS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "WARDROBE_CONFIG_DIR",
    "WARDROBE_DB_PATH",
    "RECOMMENDATION_DB_PATH",
    "COMPATIBILITY_RULES_PATH",
    "RECOMMENDATION_PERSIST_LIMIT",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _CONFIG_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        wardrobe_db_path=str(tmp_path / "wardrobe.db"),
        recommendation_db_path=str(tmp_path / "recommendations.db"),
    )


def test_config_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = AppConfig.from_env()

    assert config.wardrobe_db_path == "data/wardrobe.db"
    assert config.recommendation_db_path == "data/recommendations.db"
    assert config.rules_path is None
    assert config.persist_limit == 3
    assert config.log_level == "INFO"


def test_config_reads_environment_yaml(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Environment YAML is merged with environment variables, which win."""

    env_dir = tmp_path / "environments"
    env_dir.mkdir()
    (env_dir / "staging.yaml").write_text(
        "# staging settings\n"
        "wardrobe_db_path: \"/srv/wardrobe.db\"\n"
        "recommendation_persist_limit: 5\n"
        "log_level: debug\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("WARDROBE_CONFIG_DIR", str(env_dir))
    clean_env.setenv("RECOMMENDATION_PERSIST_LIMIT", "7")

    config = AppConfig.from_env()

    assert config.environment == "staging"
    assert config.wardrobe_db_path == "/srv/wardrobe.db"
    assert config.persist_limit == 7
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["zero", "0"])
def test_config_rejects_invalid_persist_limit(clean_env: pytest.MonkeyPatch, value: str) -> None:
    clean_env.setenv("RECOMMENDATION_PERSIST_LIMIT", value)

    with pytest.raises(ValueError):
        AppConfig.from_env()


def test_rule_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_RULES.style_affinity["casual"] = frozenset()  # type: ignore[index]
    assert load_compatibility_rules() is DEFAULT_RULES


def test_rules_override_file(tmp_path: Path) -> None:
    rules_file = tmp_path / "rules.json"
    rules_file.write_text(json.dumps({"color_affinity": {"Red": ["green"]}, "neutral_colors": ["red"]}))

    rules = load_compatibility_rules(rules_file)
    evaluator = CompatibilityEvaluator(rules)

    red = Garment(item_id="t", category="Tops", colors=["red"])
    green = Garment(item_id="b", category="Bottoms", colors=["green"])
    assert evaluator.color_compatible(red, green) is True
    assert evaluator.color_compatible(red, Garment(item_id="b2", category="Bottoms", colors=["red"])) is True
    assert rules.style_affinity is DEFAULT_RULES.style_affinity
    assert CompatibilityEvaluator().color_compatible(red, green) is False


def test_rules_override_rejects_unknown_tables(tmp_path: Path) -> None:
    rules_file = tmp_path / "rules.json"
    rules_file.write_text(json.dumps({"weights": {"style": 5}}))

    with pytest.raises(ValueError):
        load_compatibility_rules(rules_file)


def test_app_wires_services(app_config: AppConfig) -> None:
    """The app recommends from the wardrobe it stores."""

    app = WardrobeApp(app_config)
    app.wardrobe_tools.add_wardrobe_item(
        "user-1", {"item_id": "tee", "category": "Tops", "style": "casual", "color": "white", "fit": "regular"}
    )
    app.wardrobe_tools.add_wardrobe_item(
        "user-1", {"item_id": "chinos", "category": "Bottoms", "style": "casual", "color": "navy", "fit": "regular"}
    )

    [recommendation] = app.recommend("user-1")
    assert recommendation["item_ids"] == ["tee", "chinos"]
    assert recommendation["compatibility_score"] == pytest.approx(10.0)

    assert app.recommend("user-1", occasion="formal") == []
    assert len(app.recommendations.get_recommendations("user-1")) == 1
    assert app.evaluator.rules is app.rules


def test_instrument_tool_validates_and_reports(caplog: pytest.LogCaptureFixture) -> None:
    class Payload(BaseModel):
        name: str

    @instrument_tool("shout", input_model=Payload)
    def shout(name: str, suffix: str = "!") -> str:
        return name.upper() + suffix

    @instrument_tool(
        "feedback",
        input_model=FeedbackRequest,
        on_validation_error=lambda exc: {"status": "invalid", "details": exc.errors()},
    )
    def feedback(recommendation_id: int, feedback: str) -> str:
        return feedback

    caplog.set_level(logging.INFO)
    assert shout("hi") == "HI!"
    assert any(getattr(record, "event", None) == "tool_call_completed" for record in caplog.records)

    result = feedback(0, "")
    assert result["status"] == "invalid"
    assert {error["loc"][0] for error in result["details"]} == {"recommendation_id", "feedback"}


def test_log_event_renames_record_attribute_fields(caplog: pytest.LogCaptureFixture) -> None:
    """Fields named like LogRecord attributes are logged under a prefix instead of raising."""

    caplog.set_level(logging.INFO)

    log_event(logging.getLogger("wardrobe.tests"), logging.INFO, "items_counted", created=2, module="tops", count=5)

    [record] = [r for r in caplog.records if getattr(r, "event", None) == "items_counted"]
    assert record.field_created == 2
    assert record.field_module == "tops"
    assert record.count == 5
    assert record.module != "tops"


def test_redaction_and_json_formatting() -> None:
    scrubbed = redact_for_log(
        {"feedback": "private", "contact": "me@example.com", "image": "https://cdn/x.png", "ids": ("a", 1)}
    )
    assert scrubbed == {
        "feedback": "[redacted]",
        "contact": "[redacted-email]",
        "image": "[redacted-url]",
        "ids": ["a", 1],
    }

    record = logging.LogRecord("wardrobe", logging.INFO, __file__, 1, "recommendations_generated", None, None)
    record.user_id = "user-1"
    with correlation_context("corr-123"):
        payload = json.loads(JsonFormatter().format(record))
    assert payload["correlation_id"] == "corr-123"
    assert payload["user_id"] == "user-1"
    assert payload["event"] == "recommendations_generated"


@pytest.mark.parametrize(
    "module_path, public_members",
    [
        ("logic.recommendation_engine", ("RecommendationEngine", "RecommendationRun")),
        ("logic.recommendation_service", ("RecommendationService", "filter_new_outfits")),
        ("logic.compatibility", ("CompatibilityEvaluator", "WEIGHTS")),
        ("tools.wardrobe_store", ("WardrobeStore", "SQLiteWardrobeStore")),
        ("tools.recommendation_store", ("RecommendationStore", "SQLiteRecommendationStore")),
        ("evaluation.harness", ("run_evaluation_suite",)),
    ],
)
def test_modules_export_expected_members(module_path: str, public_members: Tuple[str, ...]) -> None:
    """Modules should import cleanly and expose expected members."""

    module = import_module(module_path)
    for member in public_members:
        assert hasattr(module, member), f"{module_path} is missing {member}"
