# topics package
