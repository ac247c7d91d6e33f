from leantime_mcp.stdio_server import main

main()
