"""Forward a few synthetic value lists to a local carbon listener.

Usage:
    python examples/forward_once.py [host] [port]

Without a listener on the target the flush fails, is logged and the
buffered lines are dropped.
"""

import logging
import sys

from collectd_graphite import GraphiteWriter, counter, gauge, value_list

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(message)s"
)


def main() -> None:
    host = sys.argv[1] if len(sys.argv) > 1 else "localhost"
    port = sys.argv[2] if len(sys.argv) > 2 else "2003"

    writer = GraphiteWriter()
    writer.configure({"Host": host, "Port": port, "Prefix": "servers"})

    writer.write(value_list("db01.example.com", "cpu", "load", [(gauge(), 10)]))
    for reading in (100, 150):
        writer.write(
            value_list(
                "db01.example.com",
                "interface",
                "if_octets",
                [(counter("rx"), reading)],
                plugin_instance="eth0",
            )
        )

    delivered = writer.flush()
    print("delivered" if delivered else "dropped")


if __name__ == "__main__":
    main()
