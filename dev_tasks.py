#!/usr/bin/env python3
"""
Development tasks for modelql.

Usage: python dev_tasks.py <command>
"""

import os
import shutil
import subprocess
import sys


def run_command(command, check=True):
    print(f"Running: {command}")
    result = subprocess.run(command, shell=True, check=check)
    return result.returncode == 0


def clean():
    print("Cleaning build artifacts...")
    for path in ["build", "dist", ".pytest_cache", ".mypy_cache"]:
        shutil.rmtree(path, ignore_errors=True)
    for name in os.listdir("."):
        if name.endswith(".egg-info"):
            shutil.rmtree(name, ignore_errors=True)
    for root, dirs, _files in os.walk("."):
        if "__pycache__" in dirs:
            shutil.rmtree(os.path.join(root, "__pycache__"), ignore_errors=True)
    print("Clean completed.")


def format_code():
    print("Formatting code...")
    run_command("black modelql tests examples")
    run_command("isort modelql tests examples")


def lint():
    print("Running linting...")
    success = run_command("mypy modelql", check=False)
    success = run_command("flake8 modelql tests examples", check=False) and success
    if not success:
        print("Linting failed.")
        sys.exit(1)
    print("Linting passed.")


def test():
    print("Running tests...")
    run_command("pytest tests/ -v")


def build():
    print("Building package...")
    clean()
    run_command("python -m build")


def install_dev():
    print("Installing in development mode...")
    run_command("pip install -e .[dev,test]")


def serve():
    # serves examples/schema.graphql on http://127.0.0.1:4000/graphql
    run_command("python -m modelql --schema examples/schema.graphql --log-level DEBUG")


def main():
    commands = {
        "clean": clean,
        "format": format_code,
        "lint": lint,
        "test": test,
        "build": build,
        "install-dev": install_dev,
        "serve": serve,
        "all": lambda: (format_code(), lint(), test(), build()),
    }
    if len(sys.argv) < 2 or sys.argv[1] not in commands:
        print("Usage: python dev_tasks.py <command>")
        print("Commands: " + ", ".join(commands))
        sys.exit(1)
    commands[sys.argv[1]]()


if __name__ == "__main__":
    main()
