"""Transport adapters implementing TransportPort."""

from collectd_graphite.adapters.transports.amqp import AMQPTransport
from collectd_graphite.adapters.transports.in_memory import InMemoryTransport
from collectd_graphite.adapters.transports.tcp import TCPTransport
from collectd_graphite.core.config import GraphiteConfig
from collectd_graphite.core.ports import TransportPort


def build_transport(config: GraphiteConfig) -> TransportPort:
    """Create the transport selected by the configuration.

    Returns an AMQPTransport when ``use_amqp`` is set, a TCPTransport
    otherwise.
    """
    if config.use_amqp:
        return AMQPTransport(
            host=config.amqp_host,
            port=config.amqp_port,
            user=config.amqp_user,
            password=config.amqp_password,
            vhost=config.amqp_vhost,
            exchange=config.amqp_exchange,
            timeout=config.amqp_timeout,
        )
    return TCPTransport(
        host=config.graphite_host,
        port=config.graphite_port,
        timeout=config.tcp_timeout,
    )


__all__ = [
    "AMQPTransport",
    "InMemoryTransport",
    "TCPTransport",
    "build_transport",
]
