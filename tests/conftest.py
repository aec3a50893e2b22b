"""
Shared test fixtures: an on-disk data directory laid out like the host
application's, plus registries and services bound to it.
"""

import textwrap
from pathlib import Path

import pytest

from profilegen.repos.file_repo import FileRepo
from profilegen.repos.ruleset_repo import RulesetRepo
from profilegen.repos.subscription_repo import SubscriptionRepo
from profilegen.schemas.registry import Ruleset, Subscription
from profilegen.services.config_generator_service import ConfigGeneratorService
from profilegen.services.ruleset_service import RulesetService


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Create a data directory with two subscription files."""
    subs = tmp_path / "data" / "subscribes"
    subs.mkdir(parents=True)
    (subs / "sub_a.yaml").write_text(textwrap.dedent("""\
        proxies:
          - name: HK-01
            type: ss
            server: hk.example.com
            port: 8388
          - name: JP-01
            type: trojan
            server: jp.example.com
            port: 443
          - name: Shared
            type: ss
            server: a.example.com
            port: 1
    """), encoding="utf-8")
    (subs / "sub_b.yaml").write_text(textwrap.dedent("""\
        proxies:
          - name: US-01
            type: vmess
            server: us.example.com
            port: 443
          - name: Shared
            type: ss
            server: b.example.com
            port: 2
    """), encoding="utf-8")
    (subs / "broken.yaml").write_text("proxies: [unterminated\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def files(base_dir: Path) -> FileRepo:
    return FileRepo(base_dir=str(base_dir))


@pytest.fixture
def subscriptions() -> SubscriptionRepo:
    return SubscriptionRepo(subscriptions=[
        Subscription(id="sub-a", name="Provider A", path="data/subscribes/sub_a.yaml"),
        Subscription(id="sub-b", name="Provider B", path="data/subscribes/sub_b.yaml"),
        Subscription(id="sub-broken", name="Broken", path="data/subscribes/broken.yaml"),
        Subscription(id="sub-missing", name="Missing", path="data/subscribes/missing.yaml"),
    ])


@pytest.fixture
def rulesets() -> RulesetRepo:
    return RulesetRepo(rulesets=[
        Ruleset(id="rs-ads", name="ads", path="data/rulesets/ads.yaml",
                behavior="domain", interval=86400, format="yaml"),
        Ruleset(id="rs-cn", name="cn-ip", path="data/rulesets/cn.txt",
                behavior="ipcidr", interval=3600, format="text"),
    ])


@pytest.fixture
def service(subscriptions: SubscriptionRepo, rulesets: RulesetRepo, files: FileRepo) -> ConfigGeneratorService:
    return ConfigGeneratorService(subscriptions=subscriptions, rulesets=rulesets, files=files)


@pytest.fixture
def ruleset_service(files: FileRepo) -> RulesetService:
    return RulesetService(files=files)
