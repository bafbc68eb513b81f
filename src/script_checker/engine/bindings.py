"""
CFFI bindings for edo9300 ygopro-core (OCG API v11.0).

Based on ocgapi.h and ocgapi_types.h from:
https://github.com/edo9300/ygopro-core

Only the part of the API the checker drives is declared: version query,
duel creation/destruction, script loading and card creation.

Usage:
    from script_checker.engine.bindings import ffi, load_library

    lib = load_library("./libocgcore.so")
    major, minor = ffi.new("int*"), ffi.new("int*")
    lib.OCG_GetVersion(major, minor)
"""

from pathlib import Path
from typing import Union

from cffi import FFI

ffi = FFI()

ffi.cdef("""
    /*** ENUMS ***/

    typedef enum OCG_LogTypes {
        OCG_LOG_TYPE_ERROR,
        OCG_LOG_TYPE_FROM_SCRIPT,
        OCG_LOG_TYPE_FOR_DEBUG,
        OCG_LOG_TYPE_UNDEFINED
    } OCG_LogTypes;

    typedef enum OCG_DuelCreationStatus {
        OCG_DUEL_CREATION_SUCCESS,
        OCG_DUEL_CREATION_NO_OUTPUT,
        OCG_DUEL_CREATION_NOT_CREATED,
        OCG_DUEL_CREATION_NULL_DATA_READER,
        OCG_DUEL_CREATION_NULL_SCRIPT_READER,
        OCG_DUEL_CREATION_INCOMPATIBLE_LUA_API,
        OCG_DUEL_CREATION_NULL_RNG_SEED
    } OCG_DuelCreationStatus;

    /*** TYPES ***/

    typedef void* OCG_Duel;

    typedef struct OCG_CardData {
        uint32_t code;
        uint32_t alias;
        uint16_t* setcodes;
        uint32_t type;
        uint32_t level;
        uint32_t attribute;
        uint64_t race;
        int32_t attack;
        int32_t defense;
        uint32_t lscale;
        uint32_t rscale;
        uint32_t link_marker;
    } OCG_CardData;

    typedef struct OCG_Player {
        uint32_t startingLP;
        uint32_t startingDrawCount;
        uint32_t drawCountPerTurn;
    } OCG_Player;

    typedef void (*OCG_DataReader)(void* payload, uint32_t code, OCG_CardData* data);
    typedef void (*OCG_DataReaderDone)(void* payload, OCG_CardData* data);
    typedef int (*OCG_ScriptReader)(void* payload, OCG_Duel duel, const char* name);
    typedef void (*OCG_LogHandler)(void* payload, const char* string, int type);

    typedef struct OCG_DuelOptions {
        uint64_t seed[4];
        uint64_t flags;
        OCG_Player team1;
        OCG_Player team2;
        OCG_DataReader cardReader;
        void* payload1;
        OCG_ScriptReader scriptReader;
        void* payload2;
        OCG_LogHandler logHandler;
        void* payload3;
        OCG_DataReaderDone cardReaderDone;
        void* payload4;
        uint8_t enableUnsafeLibraries;
    } OCG_DuelOptions;

    typedef struct OCG_NewCardInfo {
        uint8_t team;
        uint8_t duelist;
        uint32_t code;
        uint8_t con;
        uint32_t loc;
        uint32_t seq;
        uint32_t pos;
    } OCG_NewCardInfo;

    /*** API FUNCTIONS ***/

    void OCG_GetVersion(int* major, int* minor);

    int OCG_CreateDuel(OCG_Duel* out_ocg_duel, const OCG_DuelOptions* options_ptr);
    void OCG_DestroyDuel(OCG_Duel ocg_duel);
    void OCG_DuelNewCard(OCG_Duel ocg_duel, const OCG_NewCardInfo* info_ptr);
    int OCG_LoadScript(OCG_Duel ocg_duel, const char* buffer, uint32_t length, const char* name);
""")

# API version this checker was written against
OCG_VERSION_MAJOR = 11
OCG_VERSION_MINOR = 0

OCG_DUEL_CREATION_SUCCESS = 0

DUEL_CREATION_STATUS_NAMES = [
    "SUCCESS", "NO_OUTPUT", "NOT_CREATED",
    "NULL_DATA_READER", "NULL_SCRIPT_READER",
    "INCOMPATIBLE_LUA_API", "NULL_RNG_SEED",
]

# Entry points that must be exported by the library
REQUIRED_FUNCTIONS = (
    "OCG_GetVersion",
    "OCG_CreateDuel",
    "OCG_DuelNewCard",
    "OCG_DestroyDuel",
    "OCG_LoadScript",
)

# Duel flags (MR5 = Master Rule 5)
DUEL_FLAGS_MR5 = (5 << 16)


def load_library(lib_path: Union[str, Path]):
    """Open the engine shared library.

    Raises:
        OSError: If the library cannot be loaded.
    """
    return ffi.dlopen(str(lib_path))


def creation_status_name(status: int) -> str:
    if 0 <= status < len(DUEL_CREATION_STATUS_NAMES):
        return DUEL_CREATION_STATUS_NAMES[status]
    return "UNKNOWN"
