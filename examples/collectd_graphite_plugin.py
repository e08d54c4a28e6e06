"""collectd python plugin module forwarding metrics to Graphite.

Run inside collectd's python plugin:

    <Plugin python>
      ModulePath "/path/to/examples"
      Import "collectd_graphite_plugin"
      <Module "Graphite">
        Prefix "servers"
        Host   "graphite.example.com"
      </Module>
    </Plugin>
"""

import collectd  # provided by the collectd daemon

from collectd_graphite.adapters.collectd import register

writer = register(collectd)
