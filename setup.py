from setuptools import setup, find_packages
import os

def read_readme():
    with open(os.path.join(os.path.dirname(__file__), 'README.md'), encoding='utf8') as file:
        return file.read()

with open(os.path.join(os.path.dirname(__file__), 'requirements.txt')) as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith('#')]

long_description = read_readme()

setup(
    name='ere_reader',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    package_data={'ere_reader.config': ['*.json']},
    install_requires=requirements,
    extras_require={'test': ['pytest']},
    python_requires='>=3.11',
    description="ERE corpus reader: source/annotation file pairing and offset-preserving XML stripping",
    long_description=long_description,
    long_description_content_type='text/markdown',
    entry_points={'console_scripts': ['ere-reader=ere_reader.cli:main']},
    keywords=['NLP', 'ERE', 'corpus reader'],
)
