from setuptools import setup, find_packages

setup(
    name="spa-auth-service",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "pydantic",
        "pydantic-settings",
        "python-jose[cryptography]",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
)
