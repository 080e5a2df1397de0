"""Trade offer models and page parsers."""