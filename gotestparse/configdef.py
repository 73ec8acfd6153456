"""gotestparse default configuration file

Every configuration element ever used in the program must exist here.
These defaults may be overridden in the user's config file.

config.variables() merges these with the user config file and any overrides.
"""


# Regular expression matching a prefix to remove from the start of every log line before parsing,
# such as a timestamp added by a CI service. An empty string disables removal.
# Example for GitHub Actions raw logs: r'^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d+Z '
strip_prefix_regex = ''

# Indentation level of JSON output; None for the most compact output
json_indent = 1

# Number of times to retry retrieving a log over the network
download_retries = 4

# Exponential backoff factor between HTTP retries, in seconds
download_backoff_factor = 10

# Seconds to wait for an HTTP server to respond
download_timeout = 60
