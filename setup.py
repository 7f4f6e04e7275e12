from setuptools import setup, find_packages

setup(
    name="oipverify",
    version="0.1.0",
    description="Cross-platform verification of Open Index Protocol publisher identities",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "httpx>=0.24",
        "authlib>=1.2",
        "fastapi>=0.100",
        "pydantic>=2.0",
        "python-json-logger>=3.1",
        "uvicorn>=0.20",
    ],
    extras_require={"dev": ["pytest>=7.0", "pytest-asyncio>=0.21", "respx>=0.20"]},
    entry_points={"console_scripts": ["oipverify=oipverify.cli:main"]},
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
    ],
    keywords="oip publisher verification twitter gab ledger",
)
