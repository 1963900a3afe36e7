# retro_chip8/core/errors.py
"""
Core Layer (例外定義)

エミュレータ全体で使用される例外階層を定義します。
致命的な例外（不正命令、スタックアンダーフロー）は step() から送出され、
呼び出し元（ホストループやテスト）が捕捉して判定できるようにします。
"""


# @intent:responsibility 本パッケージが送出する全ての例外の基底クラス。
class Chip8Error(Exception):
    pass


# @intent:responsibility 命令セットに定義されていないエンコーディングを実行しようとしたことを表します。
class InvalidInstructionError(Chip8Error):
    """
    未定義のサブオペコードを持つ命令ワードを実行しようとした場合に送出されます。
    address は命令の先頭アドレス、word は16bitの命令ワードです。
    """
    def __init__(self, address: int, word: int):
        super().__init__(f"Invalid instruction {word:04X} at {address:#05x}")
        self.address = address
        self.word = word


# @intent:responsibility 空のコールスタックからの復帰（00EE）を表します。
class StackUnderflowError(Chip8Error, IndexError):
    pass


# @intent:responsibility プログラム領域に収まらないロード要求を表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    pass


# @intent:responsibility 致命的エラー後に step() が呼ばれたことを表します。
class MachineHaltedError(Chip8Error):
    pass


# @intent:responsibility 設定ファイルや設定値の不備を表します。
class ConfigError(Chip8Error, ValueError):
    pass
