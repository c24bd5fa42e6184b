from setuptools import find_packages, setup

setup(
    name="currly",
    version="0.1.0",
    description="Reusable HTTP request templates with staged construction and per-call binding",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "httpx >= 0.24",
        "requests >= 2.28",
        "typing_extensions >= 4.0",
    ],
    extras_require={
        "test": [
            "pytest >= 7",
        ],
    },
)
