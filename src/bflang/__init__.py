
from .api import CompileOptions, CompileResult, compile_file, compile_string
from .assembler import Assembler
from .compiler import BFLangCompiler, compile_program
from .errors import (
    AlreadyDefinedError,
    BFLangError,
    BFLangRuntimeError,
    BFLangSyntaxError,
    LoopBalanceError,
    MemoryExhaustedError,
)
from .lexer import Token, TokenKind, lex
from .parser import ParseResult, parse
from .pipeline import stream_compile
from .runner import TapeRunner, run_bf

__all__ = [
    'Assembler',
    'BFLangCompiler',
    'compile_program',
    'lex',
    'parse',
    'Token',
    'TokenKind',
    'ParseResult',
    'stream_compile',
    'TapeRunner',
    'run_bf',
    'CompileOptions',
    'CompileResult',
    'compile_string',
    'compile_file',
    'BFLangError',
    'BFLangSyntaxError',
    'BFLangRuntimeError',
    'MemoryExhaustedError',
    'AlreadyDefinedError',
    'LoopBalanceError',
]
