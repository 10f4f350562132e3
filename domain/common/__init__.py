"""领域层公共基类与异常"""
