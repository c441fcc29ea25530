"""
Central agent registry and registration decorator for Perudo agents.
Use @register_agent("name") above your agent class to make it available for matches, tournaments and the CLI.
All agent modules in this directory are imported below so their registration decorators run.
"""

AGENT_MAP = {}

def register_agent(name):
	"""
	Decorator to register an agent class under a given name.
	Usage:
		@register_agent("random")
		class RandomAgent(Agent): ...
	"""
	def decorator(cls):
		AGENT_MAP[name] = cls
		return cls
	return decorator


def create_agent(name, **kwargs):
	"""
	Instantiate a registered agent by (case-insensitive) name.
	Raises:
		ValueError: If the name is not registered.
	"""
	key = name.lower()
	if key not in AGENT_MAP:
		raise ValueError(f"Unknown agent: {name}. Supported: {sorted(AGENT_MAP)}")
	return AGENT_MAP[key](**kwargs)


import importlib
import os
import pkgutil

for _, _modname, _ispkg in pkgutil.iter_modules([os.path.dirname(__file__)]):
	if not _ispkg and _modname != "base":
		importlib.import_module(f"{__name__}.{_modname}")
