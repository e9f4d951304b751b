"""setuptools setup for Countdown.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import setup

setup(
    name="Countdown",
    version="0.1.0",
    description="Pausable countdown timer engine driven by a Qt frame clock",
    packages=["countdown", "countdown.timer"],
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["countdown = countdown.__main__:main"],
    },
)
