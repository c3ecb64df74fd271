from setuptools import find_packages, setup

setup(
    name="gerryaway",
    version="0.1.0",
    description="Shape compactness metrics for flagging irregular districts",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["gerryaway", "gerryaway.*"]),
    install_requires=["pydantic>=2.0", "pydantic-settings>=2.0"],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "pytest-cov",
        ]
    },
    entry_points={
        "console_scripts": ["gerryaway=gerryaway.cli:main"],
    },
    python_requires=">=3.10",
)
