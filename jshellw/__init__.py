"""
jshellw: JShell for Spring Boot archives.

Extracts the classes and libraries of a layered JAR/WAR into a temporary
directory, launches JShell on that classpath, and removes the directory
when the shell exits.
"""
