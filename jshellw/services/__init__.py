"""
Services for the jshellw pipeline.

extraction/ materializes the archive and composes the classpath,
execution/ runs the shell, cleanup/ owns the temporary directory.
AdapterService sequences them.
"""
