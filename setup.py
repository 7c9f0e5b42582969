"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

try:
	from boozetools.macroparse.runtime import make_tables
except ImportError:
	pass
else:
	make_tables(Path(__file__).parent / "mython" / "Mython.md")

setuptools.setup(
	name='mython',
	version='0.1.0',
	packages=['mython'],
	package_data={
		'mython': ["Mython.md", "Mython.automaton"],
	},
	entry_points={
		'console_scripts': ["mython = mython.cmdline:main"],
	},
	license='MIT',
	description='A tree-walking interpreter for Mython, a small indentation-structured language with classes',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
