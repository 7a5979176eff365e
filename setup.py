"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='hmscript',
	version='0.1.0',
	packages=['hmscript'],
	entry_points={
		'console_scripts': ["hmscript = hmscript.cmdline:main"],
	},
	license='MIT',
	description='A tree-walking interpreter for a small line-oriented scripting language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		"test": ["pytest"],
	},
)
