import setuptools

setuptools.setup(
	name='retrace',
	version='0.1.0',
	packages=[
		'retrace',
		'retrace.parsing',
		'retrace.support',
	],
	description='Backtracking shift-reduce recognition for arbitrary context-free grammars',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	extras_require={
		'test': ['pytest'],
	},
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
	],
)
