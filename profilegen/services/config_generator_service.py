from typing import List, Dict, Any, Optional
import logging
import anyio.to_thread
import yaml
from profilegen.core.config import settings
from profilegen.repos.file_repo import FileRepo, file_repo
from profilegen.repos.ruleset_repo import RulesetRepo, ruleset_repo
from profilegen.repos.subscription_repo import SubscriptionRepo, subscription_repo
from profilegen.schemas.generated import GenerationResult
from profilegen.schemas.profile import (
    BUILT_IN,
    Profile,
    ProxyGroup,
    Rule,
    SelectGroup,
    UrlTestGroup,
    FallbackGroup,
    LoadBalanceGroup,
    RelayGroup,
)

logger = logging.getLogger(__name__)

def _warn(warnings: Optional[List[str]], message: str) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)

def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

class ConfigGeneratorService:
    def __init__(self,
                 subscriptions: Optional[SubscriptionRepo] = None,
                 rulesets: Optional[RulesetRepo] = None,
                 files: Optional[FileRepo] = None):
        self.subscriptions = subscriptions or subscription_repo
        self.rulesets = rulesets or ruleset_repo
        self.files = files or file_repo

    async def pinned(self) -> "ConfigGeneratorService":
        """
        Returns a service whose registries are loaded once, off the event loop,
        so every lookup in one generation sees the same registry contents.
        """
        subscriptions = await anyio.to_thread.run_sync(self.subscriptions.snapshot)
        rulesets = await anyio.to_thread.run_sync(self.rulesets.snapshot)
        return ConfigGeneratorService(subscriptions=subscriptions, rulesets=rulesets, files=self.files)

    def generate_rule(self, rule: Rule, warnings: Optional[List[str]] = None) -> str:
        """
        Formats one rule as TYPE[,PAYLOAD],PROXY[,no-resolve].
        MATCH carries no payload; RULE-SET payloads are rule-set ids and are
        replaced by the rule-set name (dropped if the id is unknown).
        """
        parts = [rule.type]
        if rule.type != "MATCH":
            if rule.type == "RULE-SET":
                ruleset = self.rulesets.get_ruleset_by_id(rule.payload)
                if ruleset:
                    parts.append(ruleset.name)
                else:
                    _warn(warnings, f"Rule-set '{rule.payload}' not found, payload omitted from rule.")
            else:
                parts.append(rule.payload)
        parts.append(rule.proxy)
        if rule.no_resolve:
            parts.append("no-resolve")
        return ",".join(parts)

    async def generate_proxies(self, groups: List[ProxyGroup], warnings: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """
        Resolves the subscription proxies referenced by group members.
        Parameters:
            groups (List[ProxyGroup]): Proxy groups in profile order.
            warnings (Optional[List[str]]): Collects non-fatal diagnostics.
        Returns:
            List[Dict[str, Any]]: Proxy definitions, unique by name, in first-appearance order.
        """
        members = [member for group in groups for member in group.proxies]
        sub_ids = list(dict.fromkeys(m.type for m in members if m.type != BUILT_IN))

        proxy_map: Dict[str, List[Dict[str, Any]]] = {}
        for sub_id in sub_ids:
            sub = self.subscriptions.get_subscription_by_id(sub_id)
            if not sub:
                _warn(warnings, f"Subscription '{sub_id}' not found, its proxies are skipped.")
                continue
            try:
                content = await self.files.read_file(sub.path)
                data = yaml.safe_load(content) or {}
                proxy_map[sub.id] = data.get("proxies") or []
            except Exception as e:
                logger.error(f"Error loading subscription '{sub.name}' from {sub.path}: {e}")
                if warnings is not None:
                    warnings.append(f"Subscription '{sub.name}' could not be loaded: {e}")

        proxies = []
        seen = set()
        for member in members:
            candidates = proxy_map.get(member.type)
            if not candidates:
                continue
            proxy = next((p for p in candidates if isinstance(p, dict) and p.get("name") == member.name), None)
            if proxy is None:
                _warn(warnings, f"Proxy '{member.name}' not found in subscription '{member.type}'.")
                continue
            # TODO: disambiguate same-named proxies from different subscriptions instead of keeping the first
            if proxy["name"] in seen:
                continue
            seen.add(proxy["name"])
            proxies.append(proxy)

        return proxies

    def generate_proxy_group(self, group: ProxyGroup) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": group.name, "type": group.type, "filter": group.filter}

        if group.use:
            result["use"] = list(group.use)

        if group.proxies:
            result["proxies"] = [p.name for p in group.proxies]

        if isinstance(group, SelectGroup):
            result["disable-udp"] = group.disable_udp
        elif isinstance(group, UrlTestGroup):
            result.update({
                "url": group.url,
                "interval": group.interval,
                "tolerance": group.tolerance,
                "lazy": group.lazy,
                "disable-udp": group.disable_udp,
            })
        elif isinstance(group, FallbackGroup):
            result.update({
                "url": group.url,
                "interval": group.interval,
                "lazy": group.lazy,
                "disable-udp": group.disable_udp,
            })
        elif isinstance(group, LoadBalanceGroup):
            result.update({
                "url": group.url,
                "interval": group.interval,
                "lazy": group.lazy,
                "disable-udp": group.disable_udp,
                "strategy": group.strategy,
            })
        elif isinstance(group, RelayGroup):
            pass
        else:
            raise TypeError(f"Unsupported proxy group type: {type(group).__name__}")

        return result

    def _provider_path(self, path: str) -> str:
        return path.replace(settings.STORAGE_PREFIX, settings.PROVIDER_PATH_PREFIX, 1)

    def generate_proxy_providers(self, groups: List[ProxyGroup], warnings: Optional[List[str]] = None) -> Dict[str, Any]:
        providers = {}
        sub_ids = dict.fromkeys(sub_id for group in groups for sub_id in group.use)
        for sub_id in sub_ids:
            sub = self.subscriptions.get_subscription_by_id(sub_id)
            if not sub:
                _warn(warnings, f"Provider subscription '{sub_id}' not found. Skipping.")
                continue
            providers[sub.name] = {
                "type": "file",
                "path": self._provider_path(sub.path),
                "health-check": {
                    "enable": True,
                    "lazy": True,
                    "url": settings.HEALTH_CHECK_URL,
                    "interval": settings.HEALTH_CHECK_INTERVAL,
                },
            }
        return providers

    def generate_rule_providers(self, rules: List[Rule], warnings: Optional[List[str]] = None) -> Dict[str, Any]:
        providers = {}
        for rule in rules:
            if rule.type != "RULE-SET":
                continue
            ruleset = self.rulesets.get_ruleset_by_id(rule.payload)
            if not ruleset:
                _warn(warnings, f"Rule provider '{rule.payload}' not found. Skipping.")
                continue
            providers[ruleset.name] = {
                "type": "file",
                "behavior": ruleset.behavior,
                "path": self._provider_path(ruleset.path),
                "interval": ruleset.interval,
                "format": ruleset.format,
            }
        return providers

    async def generate_config(self, profile: Profile, warnings: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Builds the engine configuration for a profile.
        Parameters:
            profile (Profile): The user profile. Not modified.
            warnings (Optional[List[str]]): Collects non-fatal diagnostics.
        Returns:
            Dict[str, Any]: The configuration mapping, in output key order.
        """
        profile = profile.model_copy(deep=True)
        service = await self.pinned()

        config: Dict[str, Any] = {
            **profile.general_config,
            **profile.advanced_config,
            "tun": profile.tun_config,
            "dns": profile.dns_config,
        }

        # An absent key lets the engine fall back to its defaults
        for key in ("default-nameserver", "nameserver"):
            if key in config["dns"] and not config["dns"][key]:
                del config["dns"][key]

        config["proxy-providers"] = service.generate_proxy_providers(profile.proxy_groups_config, warnings)
        config["rule-providers"] = service.generate_rule_providers(profile.rules_config, warnings)
        config["proxies"] = await service.generate_proxies(profile.proxy_groups_config, warnings)
        config["proxy-groups"] = [service.generate_proxy_group(g) for g in profile.proxy_groups_config]

        geodata_mode = bool(profile.advanced_config.get("geodata-mode"))
        config["rules"] = [
            service.generate_rule(rule, warnings)
            for rule in profile.rules_config
            if geodata_mode or not rule.type.startswith("GEO")
        ]

        return config

    async def generate(self, profile: Profile) -> GenerationResult:
        warnings: List[str] = []
        config = await self.generate_config(profile, warnings)
        return GenerationResult(config=config, warnings=warnings)

    async def generate_config_file(self, profile: Profile, warnings: Optional[List[str]] = None) -> str:
        """
        Generates the configuration and writes it to the kernel config path.
        Write errors propagate to the caller.
        Returns:
            str: The path that was written.
        """
        logger.info(f"Generating kernel config for profile '{profile.name or profile.id}'")
        header = f"# DO NOT EDIT - Generated by {settings.APP_TITLE}\n"
        config = await self.generate_config(profile, warnings)
        await self.files.write_file(settings.KERNEL_CONFIG_PATH, header + dump_yaml(config))
        logger.info(f"Kernel config written to {settings.KERNEL_CONFIG_PATH}")
        return settings.KERNEL_CONFIG_PATH

config_generator_service = ConfigGeneratorService()

def get_config_generator_service() -> ConfigGeneratorService:
    return config_generator_service
