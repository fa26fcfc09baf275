from setuptools import setup, find_packages
import os

# Read requirements.txt
requirements_file = 'requirements.txt'
install_requires = []
if os.path.exists(requirements_file):
    with open(requirements_file, 'r') as f:
        install_requires = [line.strip() for line in f if line.strip() and not line.startswith('#')]

setup(
    name="raydium-bot-bundle",
    version="0.1.0",
    packages=find_packages(include=['raydium_bot_bundle', 'raydium_bot_bundle.*']),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest>=7', 'pytest-asyncio>=0.21'],
    },
    entry_points={
        'console_scripts': [
            'raydium-bot=raydium_bot_bundle.trading_bot.__main__:main',
        ],
    },
    description="Raydium pool-key, wallet-holdings and configuration helpers for a Solana trading bot",
    long_description=open('README.md').read() if os.path.exists('README.md') else '',
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    include_package_data=True,
)
