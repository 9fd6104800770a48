"""Command line front end for inspecting filesets."""
