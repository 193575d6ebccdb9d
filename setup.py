from setuptools import find_packages, setup
import os

HERE = os.path.abspath(os.path.dirname(__file__))


def load_requirements(path: str) -> list[str]:
    """Load requirements from a local file.

    Must work under PEP 517 isolated builds (wheel-from-sdist), so resolve the
    path relative to this file and fail gracefully if the file isn't present.
    """
    req_path = os.path.join(HERE, path)
    try:
        with open(req_path, "r", encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip() and not line.startswith("#")]
    except FileNotFoundError:
        return []


setup(
    name='subdmtakeover',
    version='1.0.0',
    description='Subdomain takeover detection from DNS + HTTP fingerprints',
    license='GPL-3.0',
    packages=find_packages(include=["subdmtakeover", "subdmtakeover.*"]),
    install_requires=load_requirements("requirements.txt"),
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'subdmtakeover=subdmtakeover.cli:main',
        ],
    }
)
