# core package
