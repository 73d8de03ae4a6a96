"""Default parameters for the stock simulation and its driver."""

DEFAULT_PARAMS = {
    # Simulation
    'steps': 500,
    'seed': 42,

    # Storage
    'stocks_file': '.',             # file or directory; directories get DEFAULT_FILENAME
    'stocks_filename': 'stonks.json',
    'json_indent': 2,

    # Driver
    'advance_steps': 1,             # periods advanced per CLI invocation
    'log_format': '%(levelname)s: %(message)s',
}
