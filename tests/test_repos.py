"""
Tests for the file bridge and the subscription / rule-set registries.
"""

import textwrap
from pathlib import Path

import pytest

from profilegen.repos.ruleset_repo import RulesetRepo
from profilegen.repos.subscription_repo import SubscriptionRepo


class TestSubscriptionRepo:
    def test_loads_host_list(self, tmp_path: Path):
        path = tmp_path / "subscribes.yaml"
        path.write_text(textwrap.dedent("""\
            - id: s1
              name: First
              path: data/subscribes/s1.yaml
              url: https://example.com/sub
              disabled: false
            - id: s2
              name: Second
              path: data/subscribes/s2.yaml
            - name: no-id
        """), encoding="utf-8")
        repo = SubscriptionRepo(path=str(path))
        assert [s.id for s in repo.load_subscriptions()] == ["s1", "s2"]
        assert repo.get_subscription_by_id("s2").name == "Second"
        assert repo.get_subscription_by_id("nope") is None

    def test_missing_file_is_empty(self, tmp_path: Path):
        assert SubscriptionRepo(path=str(tmp_path / "absent.yaml")).load_subscriptions() == []


class TestRulesetRepo:
    def test_defaults_applied(self, tmp_path: Path):
        path = tmp_path / "rulesets.yaml"
        path.write_text("- {id: r1, name: ads, path: data/rulesets/ads.yaml}\n", encoding="utf-8")
        ruleset = RulesetRepo(path=str(path)).get_ruleset_by_id("r1")
        assert ruleset.behavior == "classical"
        assert ruleset.format == "yaml"
        assert ruleset.interval == 86400

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "rulesets.yaml"
        path.write_text("", encoding="utf-8")
        assert RulesetRepo(path=str(path)).load_rulesets() == []


class TestFileRepo:
    @pytest.mark.anyio
    async def test_write_creates_directories(self, files, base_dir: Path):
        await files.write_file("data/kernel/config.yaml", "mode: rule\n")
        assert (base_dir / "data" / "kernel" / "config.yaml").read_text(encoding="utf-8") == "mode: rule\n"
        assert await files.read_file("data/kernel/config.yaml") == "mode: rule\n"

    @pytest.mark.anyio
    async def test_read_missing_raises(self, files):
        with pytest.raises(FileNotFoundError):
            await files.read_file("data/nothing.yaml")
