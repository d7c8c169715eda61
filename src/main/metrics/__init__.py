"""
Registry of structural metrics computed over a parsed syntax tree.

A metric maps the root node (None for blank source) to one number and is
registered under its display name with @metric. Metrics that come out of
one shared computation are registered together with @metric_group: the
decorated function returns a dict keyed by those names, and compute_all()
runs it once per tree however many of its metrics there are.

Submodules are imported on package import so their decorators run.
"""

import importlib
import pathlib
import pkgutil
from typing import Callable, Dict, Optional, Tuple

from tree_sitter import Node

MetricFn = Callable[[Optional[Node]], float]
GroupFn = Callable[[Optional[Node]], Dict[str, float]]

registry: Dict[str, MetricFn] = {}
groups: Dict[Tuple[str, ...], GroupFn] = {}


def metric(name: str):
    def wrapper(fn: MetricFn) -> MetricFn:
        registry[name] = fn
        return fn

    return wrapper


def metric_group(*names: str):
    def wrapper(fn: GroupFn) -> GroupFn:
        groups[names] = fn
        for name in names:
            registry[name] = lambda root, _name=name: fn(root)[_name]
        return fn

    return wrapper


def compute_all(root: Optional[Node]) -> Dict[str, float]:
    """
    Evaluate every registered metric for one tree, in registration order.
    """
    values: Dict[str, float] = {}
    for fn in groups.values():
        values.update(fn(root))
    for name, fn in registry.items():
        if name not in values:
            values[name] = fn(root)
    return {name: values[name] for name in registry}


for _module in pkgutil.iter_modules([str(pathlib.Path(__file__).parent)]):
    importlib.import_module(f"{__name__}.{_module.name}")
