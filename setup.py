from setuptools import setup, find_packages

setup(
    name="mdbook-gitlab-link",
    version="0.1.0",
    description="mdBook preprocessor that turns GitLab shorthand references into links",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "structlog>=23.1.0",
        "pydantic>=2.0.0",
        "typer>=0.9.0",
        "python-dotenv>=1.0.0",
        "markdown-it-py>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gitlab-link=gitlab_link.cli:main",
        ],
    },
    python_requires=">=3.11",
)
