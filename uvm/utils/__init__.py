"""通用工具：日志、子进程、文件读写、名称校验"""
