from setuptools import setup, find_packages

setup(
    name="campus-directory",
    version="1.0.0",
    packages=find_packages(include=["campus_directory", "campus_directory.*"]),
    install_requires=[
        "fastapi",
        "pydantic>=2.6",
        "pydantic-settings",
        "python-dotenv",
        "httpx",
        "mangum",
        "uvicorn",
    ],
    extras_require={
        "admin": [
            "gradio",
        ],
        "test": [
            "pytest",
            "httpx",
        ],
    },
    python_requires=">=3.8",
)
