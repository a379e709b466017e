from sgdkgen.cli import main

main()
