from setuptools import setup, find_packages

setup(
    name="envload",
    version="0.1.0",
    description="Populate dataclass instances from environment variables",
    packages=find_packages(include=["envload", "envload.*"]),
    install_requires=[
        "pydantic>=2.5.0",
        "pydantic-core",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "tests": ["pytest>=7.0.0"],
    },
    python_requires=">=3.10",
)
