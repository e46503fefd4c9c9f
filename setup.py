# setup.py

from setuptools import setup, find_packages

setup(
    name="proxmox-lxc-balancer",
    version="0.1.0",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'proxmox-balancer=proxmox_balancer.cli:main',
        ],
    },
    description="Proxmox VE LXC placement and lifecycle client",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="proxmox lxc virtualization placement",
    python_requires=">=3.7",
)
