# core/plugins.py
import importlib
import logging
import pkgutil

logger = logging.getLogger(__name__)


def load_plugins(package="topics"):
    plugins = []
    try:
        pkg = importlib.import_module(package)
    except ImportError:
        logger.warning("topic package %r not importable", package)
        return plugins
    for _, modname, ispkg in pkgutil.iter_modules(pkg.__path__):
        if ispkg:
            continue
        try:
            module = importlib.import_module(f"{package}.{modname}")
        except Exception:
            logger.exception("failed to load topic plugin %s.%s", package, modname)
            continue
        if all(hasattr(module, attr) for attr in ("name", "category", "can_handle", "solve")):
            plugins.append(module)
    return plugins


def find_plugin_for(question, plugins, preferred_topic=None):
    if preferred_topic and preferred_topic != "Auto-detect":
        for p in plugins:
            if preferred_topic.lower() in p.name.lower() or preferred_topic.lower() in getattr(p, "tags", []):
                return p
    for p in plugins:
        if p.can_handle(question):
            return p
    return None
