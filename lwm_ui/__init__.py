"""Command-line front end for linux-workload-monitor."""
