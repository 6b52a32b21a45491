"""
SiteSpider package initializer.
Defines package version and exposes the extraction agent.
"""
__version__ = "0.1.0"

from site_spider.agent import Agent
from site_spider.config import AgentConfig, ProxyConfig, UserAgentPreset, load_config
from site_spider.crawler.models import Page
from site_spider.crawler.sessions import SessionRegistry

__all__ = [
    "__version__",
    "Agent",
    "AgentConfig",
    "Page",
    "ProxyConfig",
    "SessionRegistry",
    "UserAgentPreset",
    "load_config",
]
