"""Graphite path construction."""

import re

from collectd_graphite.core.config import GraphiteConfig

_WHITESPACE = re.compile(r"\s+")


def format_host(host: str, reverse: bool = False) -> str:
    """Turn a host name into a single path segment or a reversed hierarchy.

    Args:
        host: Host name, e.g. "db01.example.com".
        reverse: If True, reverse the dot-separated labels
                 ("com.example.db01"); otherwise replace dots with
                 underscores ("db01_example_com").
    """
    if reverse:
        return ".".join(reversed(host.split(".")))
    return host.replace(".", "_")


def identifier(name: str, instance: str | None = None) -> str:
    """Join a plugin or type name with its optional instance.

    Empty instances are treated as absent: ("cpu", "0") -> "cpu-0",
    ("load", "") -> "load".
    """
    if instance:
        return f"{name}-{instance}"
    return name


def previous_value_key(
    plugin: str,
    plugin_instance: str | None,
    type: str,
    type_instance: str | None,
    ds_name: str,
) -> str:
    """Return the key under which a data source's last raw value is kept."""
    return ".".join(
        (identifier(plugin, plugin_instance), identifier(type, type_instance), ds_name)
    )


def build_path(
    config: GraphiteConfig,
    host: str,
    plugin: str,
    plugin_instance: str | None,
    type: str,
    type_instance: str | None,
    ds_name: str,
) -> str:
    """Build the dotted graphite path for one data source.

    The path is ``prefix.host.host_bucket.plugin[-inst].type[-inst].ds_name``
    with every run of whitespace collapsed to a single underscore.

    Args:
        config: Supplies prefix, host_bucket and reverse_host.
        host: Host name from the value list.
        plugin: Plugin name.
        plugin_instance: Optional plugin instance.
        type: Type name.
        type_instance: Optional type instance.
        ds_name: Data source name.

    Returns:
        Graphite metric path.
    """
    path = ".".join(
        (
            config.prefix,
            format_host(host, config.reverse_host),
            config.host_bucket,
            identifier(plugin, plugin_instance),
            identifier(type, type_instance),
            ds_name,
        )
    )
    # convert any spaces that may have snuck in
    return _WHITESPACE.sub("_", path)
