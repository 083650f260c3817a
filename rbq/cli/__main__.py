"""Module entry point for `python -m rbq.cli`."""

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from rbq.cli import cli

    cli()
