"""Runtime function sets, the ABI dispatcher and their assembly."""