# setup.py
from setuptools import setup, find_packages

setup(
    name="contract-engine",           # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),   # will find contract_engine/
    python_requires=">=3.9",
    install_requires=["pandas"],      # DataFrame batch helpers (contract_engine.frame)
    extras_require={"test": ["pytest"]},
    include_package_data=True,        # so we can bundle the JSON contracts
    package_data={
        "contract_engine.schemas": ["*.json"],
    },
    description="Schema-driven data contracts: coercion, nested validation and error reports",
    author="contract-engine maintainers",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
