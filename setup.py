from setuptools import setup

setup(
    name="tickbar",
    version="0.1.0",
    description="Live terminal progress bar with windowed rate, ETA and speed sparkline",
    packages=["tickbar"],
    python_requires=">=3.10",
    install_requires=["numpy", "tracerite"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["tickbar = tickbar.cli:main"]},
)
