"""
sitewatch: a concurrent website health checker.

Probes a set of URLs with a bounded pool of workers, validates response
headers, and in periodic mode aggregates uptime and latency per URL.
"""

__version__ = "0.1.0"
