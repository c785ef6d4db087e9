"""
Entry point for the `jshellw` command-line interface.

jshellw runs JShell against the classpath packaged inside a Spring Boot
executable JAR or WAR.
"""


def main():
    """Main entry point for the jshellw CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
