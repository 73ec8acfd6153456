"""Methods for retrieving the program configuration."""

import contextlib
import functools
import importlib.machinery
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Any

from gotestparse import configdef


# Cache configuration module here
config_module = None

CONFIG_FILE = 'gotestparserc'

# Config variables that override all others
overrides = {}


def config_dir() -> str:
    """Get the directory in which to find the configuration file."""
    if 'XDG_CONFIG_HOME' in os.environ:
        return os.environ['XDG_CONFIG_HOME']
    if 'HOME' in os.environ:
        return os.path.join(os.environ['HOME'], '.config')
    return '.'


def variables() -> dict[str, Any]:
    """Return a dict with all config variables.

    The defaults are overridden by the user config file, which is overridden by command-line
    overrides.
    """
    return {**configdef.__dict__, **config().__dict__, **overrides}


@functools.lru_cache(maxsize=None)
def get(var: str) -> Any:
    """Get a config variable.

    Raises: KeyError for an unknown variable
    """
    return variables()[var]


@contextlib.contextmanager
def override_var(obj, name: str, value: Any):
    """Change an object variable within a with context.

    The original value of the attribute is restored on context exit.
    """
    saved_value = getattr(obj, name)
    setattr(obj, name, value)
    try:
        yield saved_value
    finally:
        setattr(obj, name, saved_value)


def config() -> ModuleType:
    """Return the user's configuration file as a module."""
    global config_module
    if config_module:
        return config_module

    configfn = os.path.join(config_dir(), CONFIG_FILE)
    if (os.access(configfn, os.R_OK)
        and (spec := importlib.util.spec_from_loader(
             'gotestparserc',
             importlib.machinery.SourceFileLoader(
                 'gotestparserc', configfn)))):
        config_module = importlib.util.module_from_spec(spec)

        # Don't write the imported config file bytecode file to eliminate caching problems
        with override_var(sys, 'dont_write_bytecode', True):
            spec.loader.exec_module(config_module)
    else:
        logging.debug('Configuration file %s not found', configfn)
        config_module = ModuleType('empty')

    return config_module  # noqa: R504


def add_override(name: str, value: Any):
    """Add a config variable that overrides all others."""
    if name not in configdef.__dict__:
        logging.warning('Overriding unknown config variable %s', name)
    overrides[name] = value
    get.cache_clear()
