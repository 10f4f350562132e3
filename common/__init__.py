"""跨层公共工具"""
