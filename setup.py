from setuptools import find_packages, setup

setup(
    name="hookmock",
    version="0.1.0",
    description="Test doubles for plugin host action and filter hooks with call-count and argument expectations",
    packages=find_packages(include=["hookmock", "hookmock.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["hookmock = hookmock.cli:main"],
        "pytest11": ["hookmock = hookmock.pytest_plugin"],
    },
)
