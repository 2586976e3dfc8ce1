def print_log(message, level="INFO"):
    """Default log function when no run log is collecting lines."""
    print(message)
