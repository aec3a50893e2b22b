from pydantic import BaseModel, Field
from typing import Annotated, List, Dict, Any, Literal, Union

BUILT_IN = "Built-In"

class GroupMember(BaseModel):
    # Subscription id, or BUILT_IN for DIRECT/REJECT and other groups
    type: str
    name: str

class Rule(BaseModel):
    type: str
    payload: str = ""
    proxy: str = ""
    no_resolve: bool = Field(False, alias="no-resolve")

    model_config = {
        "populate_by_name": True
    }

class ProxyGroupBase(BaseModel):
    name: str
    filter: str = ""
    proxies: List[GroupMember] = []
    use: List[str] = []

    model_config = {
        "populate_by_name": True
    }

class SelectGroup(ProxyGroupBase):
    type: Literal["select"] = "select"
    disable_udp: bool = Field(False, alias="disable-udp")

class UrlTestGroup(ProxyGroupBase):
    type: Literal["url-test"] = "url-test"
    url: str = ""
    interval: int = 300
    tolerance: int = 150
    lazy: bool = True
    disable_udp: bool = Field(False, alias="disable-udp")

class FallbackGroup(ProxyGroupBase):
    type: Literal["fallback"] = "fallback"
    url: str = ""
    interval: int = 300
    lazy: bool = True
    disable_udp: bool = Field(False, alias="disable-udp")

class LoadBalanceGroup(ProxyGroupBase):
    type: Literal["load-balance"] = "load-balance"
    url: str = ""
    interval: int = 300
    lazy: bool = True
    disable_udp: bool = Field(False, alias="disable-udp")
    strategy: Literal["consistent-hashing", "round-robin", "sticky-sessions"] = "consistent-hashing"

class RelayGroup(ProxyGroupBase):
    type: Literal["relay"] = "relay"

ProxyGroup = Annotated[
    Union[SelectGroup, UrlTestGroup, FallbackGroup, LoadBalanceGroup, RelayGroup],
    Field(discriminator="type"),
]

class Profile(BaseModel):
    id: str = ""
    name: str = ""
    general_config: Dict[str, Any] = Field(default_factory=dict, alias="generalConfig")
    advanced_config: Dict[str, Any] = Field(default_factory=dict, alias="advancedConfig")
    tun_config: Dict[str, Any] = Field(default_factory=dict, alias="tunConfig")
    dns_config: Dict[str, Any] = Field(default_factory=dict, alias="dnsConfig")
    rules_config: List[Rule] = Field(default_factory=list, alias="rulesConfig")
    proxy_groups_config: List[ProxyGroup] = Field(default_factory=list, alias="proxyGroupsConfig")

    model_config = {
        "populate_by_name": True
    }
